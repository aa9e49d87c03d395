"""
Orbital Element Model

Circular-orbit Keplerian elements and the frame transforms shared by the
satellite and ground-station models.

Frames:
    - Inertial (ECI): satellites are propagated here.
    - Earth-fixed (ECEF): inertial vectors rotated about Z by the Earth
      rotation angle. Ground stations live here and never move.

Earth model:
    A sphere of radius EARTH_RADIUS_KM is used everywhere (altitudes,
    station placement, geocentric latitude/longitude).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Tuple

import numpy as np
from sgp4.api import jday

from constellation_networkx.errors import InvalidAltitude

# ---------------------------------------------------------------------------
# Physical Constants
# ---------------------------------------------------------------------------
EARTH_RADIUS_KM = 6371.0
EARTH_MU = 398600.4418  # km^3/s^2 (gravitational parameter)
EARTH_ROTATION_RAD_S = 7.2921159e-5  # sidereal rotation rate
SECONDS_PER_DAY = 86400.0


def normalize_deg(angle_deg: float) -> float:
    """Wrap an angle into [0, 360)."""
    wrapped = angle_deg % 360.0
    # -1e-17 % 360.0 == 360.0 in floating point
    return 0.0 if wrapped >= 360.0 else wrapped


def orbital_period_seconds(altitude_km: float) -> float:
    """
    Orbital period of a circular orbit from Kepler's third law.

    Args:
        altitude_km: Altitude above the spherical Earth in km

    Returns:
        Period in seconds

    Raises:
        InvalidAltitude: If altitude_km <= 0
    """
    if not altitude_km > 0:
        raise InvalidAltitude(f"Altitude must be positive, got {altitude_km} km")
    a = EARTH_RADIUS_KM + altitude_km
    return 2 * math.pi * math.sqrt(a**3 / EARTH_MU)


@dataclass(frozen=True)
class OrbitalElements:
    """Elements of a circular orbit at the reference epoch.

    Attributes:
        altitude_km: Altitude above the spherical Earth.
        inclination_deg: Orbital inclination.
        raan_deg: Right ascension of the ascending node.
        anomaly_deg: True (= mean, circular orbit) anomaly at the reference epoch.
        arg_periapsis_deg: Argument of periapsis; 0 for Walker shells.
    """

    altitude_km: float
    inclination_deg: float
    raan_deg: float
    anomaly_deg: float
    arg_periapsis_deg: float = 0.0

    def __post_init__(self) -> None:
        if not self.altitude_km > 0:
            raise InvalidAltitude(
                f"Altitude must be positive, got {self.altitude_km} km"
            )

    @property
    def semi_major_axis_km(self) -> float:
        return EARTH_RADIUS_KM + self.altitude_km

    @property
    def period_seconds(self) -> float:
        return orbital_period_seconds(self.altitude_km)

    @property
    def argument_of_latitude_deg(self) -> float:
        """Angle from the ascending node at the reference epoch."""
        return normalize_deg(self.arg_periapsis_deg + self.anomaly_deg)

    def anomaly_at(self, elapsed_seconds: float) -> float:
        """Anomaly in degrees after elapsed_seconds (negative rewinds)."""
        advance = 360.0 * (elapsed_seconds / self.period_seconds)
        return normalize_deg(self.anomaly_deg + advance)

    def anomaly_of(self, position_inertial: np.ndarray) -> float:
        """
        Anomaly in degrees of an inertial position, measured in the orbital
        plane given by these elements' RAAN and inclination.

        Works for any propagator output, including equatorial orbits.
        """
        raan = math.radians(self.raan_deg)
        inc = math.radians(self.inclination_deg)
        x, y, z = (float(c) for c in position_inertial)

        # Rotate by -RAAN about Z, then by -inclination about X
        x_node = math.cos(raan) * x + math.sin(raan) * y
        y_node = -math.sin(raan) * x + math.cos(raan) * y
        y_plane = math.cos(inc) * y_node + math.sin(inc) * z

        u_deg = math.degrees(math.atan2(y_plane, x_node))
        return normalize_deg(u_deg - self.arg_periapsis_deg)

    def state_at(self, elapsed_seconds: float) -> Tuple[np.ndarray, np.ndarray]:
        """
        Inertial position (km) and velocity (km/s) after elapsed_seconds.

        The anomaly is always evaluated from the reference elements, so
        states at t=a+b do not depend on how the interval was split.
        """
        a = self.semi_major_axis_km
        speed = math.sqrt(EARTH_MU / a)

        u = math.radians(
            normalize_deg(self.arg_periapsis_deg + self.anomaly_at(elapsed_seconds))
        )
        raan = math.radians(normalize_deg(self.raan_deg))
        inc = math.radians(normalize_deg(self.inclination_deg))

        cos_u, sin_u = math.cos(u), math.sin(u)
        cos_raan, sin_raan = math.cos(raan), math.sin(raan)
        cos_inc, sin_inc = math.cos(inc), math.sin(inc)

        position = a * np.array(
            [
                cos_raan * cos_u - sin_raan * cos_inc * sin_u,
                sin_raan * cos_u + cos_raan * cos_inc * sin_u,
                sin_inc * sin_u,
            ]
        )
        velocity = speed * np.array(
            [
                -cos_raan * sin_u - sin_raan * cos_inc * cos_u,
                -sin_raan * sin_u + cos_raan * cos_inc * cos_u,
                sin_inc * cos_u,
            ]
        )
        return position, velocity


# ---------------------------------------------------------------------------
# Earth rotation
# ---------------------------------------------------------------------------

def datetime_to_jd(dt: datetime) -> Tuple[float, float]:
    """
    Convert datetime to Julian Date (jd, fraction).

    Returns:
        Tuple of (julian_day_at_midnight, day_fraction)
    """
    return jday(
        dt.year,
        dt.month,
        dt.day,
        dt.hour,
        dt.minute,
        dt.second + dt.microsecond / 1e6,
    )


def compute_gmst(dt: datetime) -> float:
    """
    Compute Greenwich Mean Sidereal Time (GMST) in radians.

    Uses the IAU 1982 model approximation.

    Args:
        dt: UTC datetime

    Returns:
        GMST angle in radians
    """
    jd_day, fr = datetime_to_jd(dt)
    jd = jd_day + fr

    # Julian centuries from J2000.0
    T = (jd - 2451545.0) / 36525.0

    gmst_deg = (
        280.46061837
        + 360.98564736629 * (jd - 2451545.0)
        + 0.000387933 * T**2
        - T**3 / 38710000.0
    )

    return math.radians(normalize_deg(gmst_deg))


def earth_rotation_angle(
    reference_epoch: datetime,
    elapsed_seconds: float,
    enabled: bool = True,
) -> float:
    """Angle (rad) between the inertial and Earth-fixed X axes."""
    if not enabled:
        return 0.0
    theta = compute_gmst(reference_epoch) + EARTH_ROTATION_RAD_S * elapsed_seconds
    return theta % (2 * math.pi)


def inertial_to_ecef(vector: np.ndarray, theta_rad: float) -> np.ndarray:
    """
    Rotate an inertial vector into the Earth-fixed frame.

    This is a simple Z-axis rotation by the negative rotation angle.
    """
    cos_t = math.cos(theta_rad)
    sin_t = math.sin(theta_rad)
    x, y, z = vector
    return np.array([cos_t * x + sin_t * y, -sin_t * x + cos_t * y, z])


# ---------------------------------------------------------------------------
# Geodetic conversions (spherical Earth)
# ---------------------------------------------------------------------------

def geodetic_to_ecef(lat_deg: float, lon_deg: float, alt_km: float) -> np.ndarray:
    """Earth-fixed Cartesian position (km) of a point above the sphere."""
    r = EARTH_RADIUS_KM + alt_km
    lat = math.radians(lat_deg)
    lon = math.radians(lon_deg)
    return np.array(
        [
            r * math.cos(lat) * math.cos(lon),
            r * math.cos(lat) * math.sin(lon),
            r * math.sin(lat),
        ]
    )


def ecef_to_geocentric(position: np.ndarray) -> Tuple[float, float, float]:
    """
    Geocentric latitude, longitude (degrees) and altitude (km).

    Longitude is wrapped into [-180, 180).
    """
    x, y, z = (float(c) for c in position)
    r = math.sqrt(x**2 + y**2 + z**2)
    lat_rad = math.asin(z / r) if r > 0 else 0.0
    lon_deg = math.degrees(math.atan2(y, x))
    lon_deg = normalize_deg(lon_deg + 180.0) - 180.0
    return math.degrees(lat_rad), lon_deg, r - EARTH_RADIUS_KM


def elevation_angles_deg(observer: np.ndarray, targets: np.ndarray) -> np.ndarray:
    """
    Elevation of each target above the observer's local horizon.

    The local vertical is the geocentric radial direction of the observer.
    A target coinciding with the observer is reported at 90 degrees.

    Args:
        observer: Earth-fixed observer position, shape (3,)
        targets: Earth-fixed target positions, shape (n, 3)

    Returns:
        Elevation angles in degrees, shape (n,)
    """
    targets = np.asarray(targets, dtype=float).reshape(-1, 3)
    up = observer / np.linalg.norm(observer)
    rho = targets - observer
    ranges = np.linalg.norm(rho, axis=1)

    safe = np.where(ranges > 0, ranges, 1.0)
    sin_el = np.clip(rho @ up / safe, -1.0, 1.0)
    elevations = np.degrees(np.arcsin(sin_el))
    return np.where(ranges > 0, elevations, 90.0)


def segment_clearance_km(observer: np.ndarray, targets: np.ndarray) -> np.ndarray:
    """
    Minimum distance from the Earth's centre to each observer-target segment.

    Math:
        Closest point P = r1 + t * d with d = r2 - r1 and
        t = -dot(r1, d) / dot(d, d), clamped to [0, 1] for the segment.

    Args:
        observer: Earth-fixed observer position, shape (3,)
        targets: Earth-fixed target positions, shape (n, 3)

    Returns:
        Clearance in km, shape (n,)
    """
    targets = np.asarray(targets, dtype=float).reshape(-1, 3)
    d = targets - observer
    d_len_sq = np.einsum("ij,ij->i", d, d)

    # Coincident points: the segment is the observer itself
    safe = np.where(d_len_sq > 0, d_len_sq, 1.0)
    t = np.where(d_len_sq > 0, -(d @ observer) / safe, 0.0)
    t = np.clip(t, 0.0, 1.0)

    closest = observer + t[:, None] * d
    return np.linalg.norm(closest, axis=1)
