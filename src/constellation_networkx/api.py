"""
Function-style API for host orchestration layers.

A thin binding surface: build a constellation, mutate it with
``add_groundstation``/``propagate`` (in place; the same instance is
returned), and read it with the extraction functions.
"""

from __future__ import annotations

from typing import Optional, Union

from constellation_networkx.network.constellation import Constellation
from constellation_networkx.network.walker import (
    ConstellationType,
    PropagationModel,
    WalkerConfig,
)


def create_constellation(
    satellites: int,
    planes: int,
    ipc: int,
    altitude: float,
    inclination: float,
    minimum_elevation: float,
    constellation_type: Union[ConstellationType, str] = ConstellationType.DELTA,
    **options,
) -> Constellation:
    """
    Create a Walker constellation at epoch 0 with no ground stations.

    Args:
        satellites: Total number of satellites
        planes: Number of orbital planes
        ipc: Satellites per plane (must equal satellites / planes)
        altitude: Orbital altitude in km
        inclination: Orbital inclination in degrees
        minimum_elevation: Minimum elevation in degrees for ground links
        constellation_type: ConstellationType or "star"/"delta"
        **options: Further WalkerConfig fields (phasing_factor, step_seconds,
            propagation_model, epoch_iso, earth_rotation)

    Returns:
        The new Constellation

    Raises:
        InvalidTopology: Counts are non-positive or inconsistent
        InvalidAltitude: Altitude is not positive
        InvalidCoordinate: Minimum elevation outside [-90, 90]
    """
    model = options.pop("propagation_model", PropagationModel.KEPLERIAN)
    config = WalkerConfig(
        satellites=satellites,
        planes=planes,
        ipc=ipc,
        altitude_km=altitude,
        inclination_deg=inclination,
        min_elevation_deg=minimum_elevation,
        constellation_type=ConstellationType(constellation_type),
        propagation_model=PropagationModel(model),
        **options,
    )
    return Constellation(config)


def add_groundstation(
    constellation: Constellation,
    lat: float,
    lon: float,
    alt: float,
    name: Optional[str] = None,
) -> Constellation:
    """
    Append a ground station; its id is the next free node id.

    Raises:
        InvalidCoordinate: If lat or lon is out of range
    """
    constellation.add_groundstation(lat, lon, alt, name=name)
    return constellation


def propagate(constellation: Constellation, step: int) -> Constellation:
    """
    Advance the constellation by ``step`` steps in place.

    Raises:
        InvalidStep: If the step cannot be applied
    """
    return constellation.propagate(step)
