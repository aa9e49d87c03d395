"""Orbital mechanics: circular Keplerian elements, SGP4 and frame transforms."""

from constellation_networkx.orbital.elements import (
    EARTH_MU,
    EARTH_RADIUS_KM,
    EARTH_ROTATION_RAD_S,
    OrbitalElements,
    compute_gmst,
    datetime_to_jd,
    earth_rotation_angle,
    ecef_to_geocentric,
    elevation_angles_deg,
    geodetic_to_ecef,
    inertial_to_ecef,
    normalize_deg,
    orbital_period_seconds,
    segment_clearance_km,
)

__all__ = [
    "EARTH_MU",
    "EARTH_RADIUS_KM",
    "EARTH_ROTATION_RAD_S",
    "OrbitalElements",
    "compute_gmst",
    "datetime_to_jd",
    "earth_rotation_angle",
    "ecef_to_geocentric",
    "elevation_angles_deg",
    "geodetic_to_ecef",
    "inertial_to_ecef",
    "normalize_deg",
    "orbital_period_seconds",
    "segment_clearance_km",
]
