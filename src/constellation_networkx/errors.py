"""Error types raised by constellation construction and mutation.

All validation happens eagerly at the call that introduces the bad input.
Every error derives from ``ValueError`` so callers that only care about
"bad arguments" can catch that.
"""

from __future__ import annotations


class ConstellationError(ValueError):
    """Base class for all constellation errors."""


class InvalidTopology(ConstellationError):
    """Satellite/plane/ipc counts are inconsistent or non-positive."""


class InvalidCoordinate(ConstellationError):
    """Latitude, longitude or elevation angle out of range."""


class InvalidAltitude(ConstellationError):
    """Orbital altitude is not strictly positive."""


class InvalidStep(ConstellationError):
    """A propagation step cannot be applied."""


class UnknownNode(ConstellationError, KeyError):
    """A node id does not exist in the constellation."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else ""
