"""
Constellation aggregate

Owns the ordered satellites and ground stations of one Walker shell together
with the current simulated epoch (an integer step count starting at 0).

Node ids:
    - satellites:      0 .. satellites-1   (plane * ipc + index_in_plane)
    - ground stations: satellites, satellites+1, ...   (insertion order)

Frames:
    Satellites are propagated in the inertial frame and rotated into the
    Earth-fixed frame by the Earth rotation angle at the current epoch.
    Ground stations are fixed in the Earth-fixed frame and never move.

The API offers no locking; callers sharing an instance across threads must
serialize access themselves.
"""

from __future__ import annotations

import logging
import math
import numbers
from datetime import datetime, timedelta
from typing import List, Optional, Sequence, Tuple

import numpy as np

from constellation_networkx.errors import InvalidStep, UnknownNode
from constellation_networkx.network.links import Link, compute_links
from constellation_networkx.network.nodes import GroundStation, Node, Satellite
from constellation_networkx.network.walker import (
    ConstellationType,
    PropagationModel,
    WalkerConfig,
)
from constellation_networkx.orbital.elements import earth_rotation_angle
from constellation_networkx.orbital.sgp4_engine import Sgp4Orbit

logger = logging.getLogger(__name__)


class Constellation:
    """
    A single-shell Walker constellation advanced through discrete time steps.

    Mutation (``add_groundstation``, ``propagate``) happens in place; graphs
    and position maps extracted before a mutation are stale afterwards.
    """

    def __init__(self, config: WalkerConfig):
        """
        Build every satellite from the Walker parameters at epoch 0.

        Args:
            config: Walker shell configuration (validated here)

        Raises:
            InvalidTopology, InvalidAltitude, InvalidCoordinate, InvalidStep:
                If the configuration is invalid
        """
        self.config = config.validate()
        self._reference_epoch = config.reference_epoch
        self._epoch = 0

        use_sgp4 = config.propagation_model is PropagationModel.SGP4
        self._satellites: List[Satellite] = []
        for slot in config.generate_slots():
            sgp4_orbit = (
                Sgp4Orbit(slot.elements, self._reference_epoch, satnum=slot.sat_id + 1)
                if use_sgp4
                else None
            )
            self._satellites.append(Satellite(
                sat_id=slot.sat_id,
                plane=slot.plane,
                index_in_plane=slot.index_in_plane,
                elements=slot.elements,
                sgp4_orbit=sgp4_orbit,
            ))
        self._ground_stations: List[GroundStation] = []

        self._apply_states(self._compute_states(0.0), 0.0)

        logger.info(
            "Created Walker %s constellation: %d satellites, %d planes x %d, "
            "altitude %.1f km, inclination %.2f°, period %.1f s (%s)",
            config.constellation_type.value,
            config.satellites,
            config.planes,
            config.ipc,
            config.altitude_km,
            config.inclination_deg,
            config.orbital_period_seconds,
            config.propagation_model.value,
        )

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def satellites(self) -> Tuple[Satellite, ...]:
        return tuple(self._satellites)

    @property
    def ground_stations(self) -> Tuple[GroundStation, ...]:
        return tuple(self._ground_stations)

    @property
    def constellation_type(self) -> ConstellationType:
        return self.config.constellation_type

    @property
    def min_elevation_deg(self) -> float:
        return self.config.min_elevation_deg

    @property
    def epoch(self) -> int:
        """Number of steps elapsed since construction (may be negative)."""
        return self._epoch

    @property
    def elapsed_seconds(self) -> float:
        return self._epoch * self.config.step_seconds

    @property
    def current_time(self) -> datetime:
        """Wall-clock time of the current epoch."""
        return self._reference_epoch + timedelta(seconds=self.elapsed_seconds)

    @property
    def earth_rotation_rad(self) -> float:
        return earth_rotation_angle(
            self._reference_epoch, self.elapsed_seconds, self.config.earth_rotation
        )

    @property
    def number_of_satellites(self) -> int:
        return len(self._satellites)

    @property
    def node_count(self) -> int:
        """Satellites plus ground stations."""
        return len(self._satellites) + len(self._ground_stations)

    def nodes(self) -> List[Node]:
        """All nodes ordered by id."""
        return [*self._satellites, *self._ground_stations]

    def get_node(self, node_id: int) -> Node:
        """
        Look up a satellite or ground station by node id.

        Raises:
            UnknownNode: If no node has this id
        """
        if 0 <= node_id < len(self._satellites):
            return self._satellites[node_id]
        index = node_id - len(self._satellites)
        if 0 <= index < len(self._ground_stations):
            return self._ground_stations[index]
        raise UnknownNode(
            f"Node {node_id} not in constellation (0 to {self.node_count - 1})"
        )

    def satellite_at(self, plane: int, index_in_plane: int) -> Satellite:
        """Satellite by Walker coordinates; indices wrap around."""
        plane %= self.config.planes
        index_in_plane %= self.config.ipc
        return self._satellites[self.config.sat_id(plane, index_in_plane)]

    def satellite_positions(self) -> np.ndarray:
        """Earth-fixed satellite positions, shape (satellites, 3), ordered by id."""
        if not self._satellites:
            return np.zeros((0, 3))
        return np.vstack([sat.position for sat in self._satellites])

    def distance(self, first: int, second: int) -> float:
        """Euclidean distance in km between two nodes."""
        p1 = self.get_node(first).position
        p2 = self.get_node(second).position
        return float(np.linalg.norm(p1 - p2))

    def links(self) -> List[Link]:
        """All links at the current epoch, sorted by (u, v)."""
        return compute_links(self)[0]

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_groundstation(
        self,
        lat: float,
        lon: float,
        alt: float = 0.0,
        name: Optional[str] = None,
    ) -> GroundStation:
        """
        Append a ground station with the next free node id.

        Stations are never reordered or deduplicated.

        Args:
            lat: Latitude in degrees, [-90, 90]
            lon: Longitude in degrees, [-180, 180]
            alt: Height above the spherical Earth in km
            name: Optional label (default: "GS-<id>")

        Returns:
            The new GroundStation

        Raises:
            InvalidCoordinate: If lat or lon is out of range
        """
        station = GroundStation(
            station_id=self.node_count,
            lat_deg=lat,
            lon_deg=lon,
            alt_km=alt,
            name=name,
        )
        self._ground_stations.append(station)
        logger.debug(
            "Added ground station %s (id=%d) at lat=%.4f lon=%.4f alt=%.3f km",
            station.name, station.id, station.lat_deg, station.lon_deg, station.alt_km,
        )
        return station

    def propagate(self, step: int) -> "Constellation":
        """
        Advance the epoch by ``step`` steps (negative values rewind).

        States are evaluated from the reference elements at the new cumulative
        time, so propagate(a) followed by propagate(b) equals propagate(a + b).
        The constellation is left untouched if the step cannot be applied.

        Args:
            step: Number of steps of ``config.step_seconds`` each

        Returns:
            self

        Raises:
            InvalidStep: If step is not an integer, or the orbital model
                cannot produce a state at the new epoch
        """
        if isinstance(step, bool) or not isinstance(step, numbers.Integral):
            raise InvalidStep(f"step must be an integer, got {step!r}")

        new_epoch = self._epoch + int(step)
        elapsed = new_epoch * self.config.step_seconds
        if not math.isfinite(elapsed):
            raise InvalidStep(f"Epoch {new_epoch} is out of range")

        states = self._compute_states(elapsed)
        self._apply_states(states, elapsed)
        self._epoch = new_epoch

        logger.debug(
            "Propagated by %d steps to epoch %d (t=%.3f s)",
            step, new_epoch, elapsed,
        )
        return self

    def _compute_states(
        self, elapsed_seconds: float
    ) -> Sequence[Tuple[np.ndarray, np.ndarray]]:
        return [sat.state_at(elapsed_seconds) for sat in self._satellites]

    def _apply_states(
        self,
        states: Sequence[Tuple[np.ndarray, np.ndarray]],
        elapsed_seconds: float,
    ) -> None:
        theta = earth_rotation_angle(
            self._reference_epoch, elapsed_seconds, self.config.earth_rotation
        )
        for sat, (position, velocity) in zip(self._satellites, states):
            sat.set_state(position, velocity, theta)

    def summary(self) -> str:
        """Return a summary of the constellation configuration."""
        cfg = self.config
        return (
            f"Walker {cfg.constellation_type.value.capitalize()} Constellation:\n"
            f"  Planes: {cfg.planes}\n"
            f"  Sats/plane: {cfg.ipc}\n"
            f"  Total satellites: {cfg.satellites}\n"
            f"  Ground stations: {len(self._ground_stations)}\n"
            f"  Inclination: {cfg.inclination_deg}°\n"
            f"  Altitude: {cfg.altitude_km} km\n"
            f"  Orbital period: {cfg.orbital_period_seconds:.1f} s "
            f"({cfg.orbital_period_seconds / 60:.1f} min)\n"
            f"  Epoch: {self._epoch} ({self.current_time.isoformat()})"
        )

    def __repr__(self) -> str:
        return (
            f"Constellation(type={self.config.constellation_type.value}, "
            f"satellites={self.number_of_satellites}, "
            f"ground_stations={len(self._ground_stations)}, epoch={self._epoch})"
        )
