"""
Walker Constellation Configuration

Walker Star / Walker Delta shell parameters, their validation, and the
per-satellite orbital elements derived from them.

Phasing rule (i:t/p/f notation with t satellites, p planes, f phasing factor):
    RAAN(p)       = p * ΔΩ,  ΔΩ = 180°/planes (Star) or 360°/planes (Delta)
    anomaly(p, k) = k * 360°/ipc + p * f * 360°/satellites   (mod 360°)
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List, NamedTuple

from constellation_networkx.errors import (
    InvalidAltitude,
    InvalidCoordinate,
    InvalidStep,
    InvalidTopology,
)
from constellation_networkx.orbital.elements import (
    EARTH_RADIUS_KM,
    SECONDS_PER_DAY,
    OrbitalElements,
    normalize_deg,
    orbital_period_seconds,
)

# Fixed epoch for reproducibility (J2000.0 epoch: 2000-01-01T12:00:00Z)
DEFAULT_EPOCH_ISO = "2000-01-01T12:00:00+00:00"

# One propagation step is one millisecond unless configured otherwise
DEFAULT_STEP_SECONDS = 0.001


class _CaseInsensitiveEnum(Enum):
    """Accepts "Star", "STAR" or "star" for the same member."""

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value == value.lower():
                    return member
        return None


class ConstellationType(_CaseInsensitiveEnum):
    """Walker pattern; selects the RAAN spread between planes."""

    STAR = "star"
    DELTA = "delta"

    @property
    def raan_span_deg(self) -> float:
        return 180.0 if self is ConstellationType.STAR else 360.0


class PropagationModel(_CaseInsensitiveEnum):
    """Orbital model used to turn elements into states."""

    KEPLERIAN = "keplerian"
    SGP4 = "sgp4"


class SatelliteSlot(NamedTuple):
    """Identity and reference elements of one satellite in the shell."""

    sat_id: int
    plane: int
    index_in_plane: int
    elements: OrbitalElements


@dataclass(frozen=True)
class WalkerConfig:
    """Configuration for a single-shell Walker constellation.

    Attributes:
        satellites: Total number of satellites.
        planes: Number of orbital planes.
        ipc: Satellites per plane; must equal satellites / planes.
        altitude_km: Orbital altitude above the spherical Earth in km.
        inclination_deg: Orbital inclination in degrees.
        min_elevation_deg: Minimum elevation for a ground link.
        constellation_type: Walker Star or Walker Delta.
        phasing_factor: Walker phasing factor (F parameter), in [0, planes).
        step_seconds: Duration of one propagation step.
        propagation_model: Keplerian (exact two-body) or SGP4.
        epoch_iso: Reference epoch as ISO 8601 string (default: J2000.0).
        earth_rotation: Rotate satellites under the Earth-fixed frame.
    """

    satellites: int
    planes: int
    ipc: int
    altitude_km: float
    inclination_deg: float
    min_elevation_deg: float = 10.0
    constellation_type: ConstellationType = ConstellationType.DELTA
    phasing_factor: int = 1

    step_seconds: float = DEFAULT_STEP_SECONDS
    propagation_model: PropagationModel = PropagationModel.KEPLERIAN
    epoch_iso: str = DEFAULT_EPOCH_ISO
    earth_rotation: bool = True

    def validate(self) -> "WalkerConfig":
        """
        Check the configuration and return it unchanged.

        Raises:
            InvalidTopology: Non-integer or non-positive counts, ipc mismatch, bad phasing factor
            InvalidAltitude: Non-positive altitude
            InvalidCoordinate: Elevation threshold outside [-90, 90]
            InvalidStep: Non-positive step duration
        """
        for field in ("satellites", "planes", "ipc", "phasing_factor"):
            value = getattr(self, field)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise InvalidTopology(f"{field} must be an integer, got {value!r}")
        if self.planes <= 0:
            raise InvalidTopology(f"planes must be positive, got {self.planes}")
        if self.satellites <= 0:
            raise InvalidTopology(f"satellites must be positive, got {self.satellites}")
        if self.satellites % self.planes != 0:
            raise InvalidTopology(
                f"{self.satellites} satellites cannot be split evenly "
                f"across {self.planes} planes"
            )
        if self.ipc != self.satellites // self.planes:
            raise InvalidTopology(
                f"ipc={self.ipc} does not match satellites/planes="
                f"{self.satellites // self.planes}"
            )
        if not 0 <= self.phasing_factor < self.planes:
            raise InvalidTopology(
                f"phasing_factor must be in [0, {self.planes}), "
                f"got {self.phasing_factor}"
            )
        if not self.altitude_km > 0:
            raise InvalidAltitude(
                f"Altitude must be positive, got {self.altitude_km} km"
            )
        if not -90.0 <= self.min_elevation_deg <= 90.0:
            raise InvalidCoordinate(
                f"Minimum elevation must be in [-90, 90], "
                f"got {self.min_elevation_deg}"
            )
        if not self.step_seconds > 0:
            raise InvalidStep(
                f"step_seconds must be positive, got {self.step_seconds}"
            )
        return self

    @property
    def reference_epoch(self) -> datetime:
        """Parse epoch_iso string to datetime object."""
        return datetime.fromisoformat(self.epoch_iso)

    @property
    def semi_major_axis_km(self) -> float:
        return EARTH_RADIUS_KM + self.altitude_km

    @property
    def orbital_period_seconds(self) -> float:
        """Compute orbital period using Kepler's third law."""
        return orbital_period_seconds(self.altitude_km)

    @property
    def mean_motion_rev_per_day(self) -> float:
        """Mean motion in revolutions per day."""
        return SECONDS_PER_DAY / self.orbital_period_seconds

    @property
    def orbital_speed_km_s(self) -> float:
        return 2 * math.pi * self.semi_major_axis_km / self.orbital_period_seconds

    @property
    def raan_spacing_deg(self) -> float:
        """ΔΩ between adjacent planes."""
        return self.constellation_type.raan_span_deg / self.planes

    @property
    def phase_spacing_deg(self) -> float:
        """ΔΦ between adjacent satellites in one plane."""
        return 360.0 / self.ipc

    @property
    def phase_offset_deg(self) -> float:
        """Δf, the anomaly shift from one plane to the next."""
        return 360.0 * self.phasing_factor / self.satellites

    def sat_id(self, plane: int, index_in_plane: int) -> int:
        return plane * self.ipc + index_in_plane

    def generate_slots(self) -> List[SatelliteSlot]:
        """Orbital elements of every satellite, ordered by id."""
        slots = []
        for plane in range(self.planes):
            raan_deg = self.raan_spacing_deg * plane
            for index_in_plane in range(self.ipc):
                anomaly_deg = normalize_deg(
                    self.phase_spacing_deg * index_in_plane
                    + self.phase_offset_deg * plane
                )
                elements = OrbitalElements(
                    altitude_km=self.altitude_km,
                    inclination_deg=self.inclination_deg,
                    raan_deg=raan_deg,
                    anomaly_deg=anomaly_deg,
                )
                slots.append(SatelliteSlot(
                    sat_id=self.sat_id(plane, index_in_plane),
                    plane=plane,
                    index_in_plane=index_in_plane,
                    elements=elements,
                ))
        return slots
