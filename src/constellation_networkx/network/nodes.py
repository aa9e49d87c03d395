"""
Constellation nodes: satellites and ground stations.

Both node kinds expose an Earth-fixed ``position`` (km) and geocentric
``lat_deg``/``lon_deg``/``alt_km`` so the link engine and the exporters can
treat them uniformly.
"""

from __future__ import annotations

from typing import Optional, Tuple, Union

import numpy as np

from constellation_networkx.errors import InvalidAltitude, InvalidCoordinate
from constellation_networkx.orbital.elements import (
    EARTH_RADIUS_KM,
    OrbitalElements,
    ecef_to_geocentric,
    geodetic_to_ecef,
    inertial_to_ecef,
    normalize_deg,
)
from constellation_networkx.orbital.sgp4_engine import Sgp4Orbit

NODE_TYPE_SATELLITE = "S"
NODE_TYPE_GROUND_STATION = "G"


class Satellite:
    """
    One satellite of a Walker shell.

    Identity and reference elements are fixed at construction; the state
    attributes are only valid for the owning constellation's current epoch.
    """

    node_type = NODE_TYPE_SATELLITE
    kind = "satellite"

    def __init__(
        self,
        sat_id: int,
        plane: int,
        index_in_plane: int,
        elements: OrbitalElements,
        sgp4_orbit: Optional[Sgp4Orbit] = None,
    ):
        self.id = sat_id
        self.plane = plane
        self.index_in_plane = index_in_plane
        self.elements = elements
        self._sgp4_orbit = sgp4_orbit

        self.anomaly_deg = elements.anomaly_deg
        self.position_inertial = np.zeros(3)
        self.velocity = np.zeros(3)
        self.position = np.zeros(3)

    @property
    def name(self) -> str:
        return f"SAT-{self.id:05d}"

    def state_at(self, elapsed_seconds: float) -> Tuple[np.ndarray, np.ndarray]:
        """Inertial position and velocity after elapsed_seconds."""
        if self._sgp4_orbit is not None:
            return self._sgp4_orbit.state_at(elapsed_seconds)
        return self.elements.state_at(elapsed_seconds)

    def set_state(
        self,
        position_inertial: np.ndarray,
        velocity: np.ndarray,
        theta_rad: float,
    ) -> None:
        """Store a propagated state; the anomaly is read back from the position."""
        self.anomaly_deg = self.elements.anomaly_of(position_inertial)
        self.position_inertial = position_inertial
        self.velocity = velocity
        self.position = inertial_to_ecef(position_inertial, theta_rad)

    @property
    def is_ascending(self) -> bool:
        """True while the satellite moves northward."""
        return bool(self.velocity[2] >= 0.0)

    @property
    def lat_deg(self) -> float:
        return ecef_to_geocentric(self.position)[0]

    @property
    def lon_deg(self) -> float:
        return ecef_to_geocentric(self.position)[1]

    @property
    def alt_km(self) -> float:
        return ecef_to_geocentric(self.position)[2]

    def __repr__(self) -> str:
        return (
            f"Satellite(id={self.id}, plane={self.plane}, "
            f"index_in_plane={self.index_in_plane}, "
            f"raan={self.elements.raan_deg:.3f}, anomaly={self.anomaly_deg:.3f})"
        )


class GroundStation:
    """A fixed point on (or above) the Earth's surface."""

    node_type = NODE_TYPE_GROUND_STATION
    kind = "ground_station"

    def __init__(
        self,
        station_id: int,
        lat_deg: float,
        lon_deg: float,
        alt_km: float = 0.0,
        name: Optional[str] = None,
    ):
        """
        Validate geodetic coordinates and place the station in the
        Earth-fixed frame.

        Raises:
            InvalidCoordinate: Latitude outside [-90, 90] or longitude outside [-180, 180]
            InvalidAltitude: Altitude at or below the centre of the Earth
        """
        if not -90.0 <= lat_deg <= 90.0:
            raise InvalidCoordinate(f"Latitude must be in [-90, 90], got {lat_deg}")
        if not -180.0 <= lon_deg <= 180.0:
            raise InvalidCoordinate(f"Longitude must be in [-180, 180], got {lon_deg}")
        if not alt_km > -EARTH_RADIUS_KM:
            raise InvalidAltitude(
                f"Ground station altitude must be above {-EARTH_RADIUS_KM} km, "
                f"got {alt_km}"
            )

        self.id = station_id
        self.name = name if name is not None else f"GS-{station_id}"
        self.lat_deg = float(lat_deg)
        # 180 and -180 are the same meridian
        self.lon_deg = normalize_deg(float(lon_deg) + 180.0) - 180.0
        self.alt_km = float(alt_km)
        self.position = geodetic_to_ecef(self.lat_deg, self.lon_deg, self.alt_km)

    def __repr__(self) -> str:
        return (
            f"GroundStation(id={self.id}, name={self.name!r}, "
            f"lat={self.lat_deg}, lon={self.lon_deg}, alt={self.alt_km})"
        )


Node = Union[Satellite, GroundStation]
