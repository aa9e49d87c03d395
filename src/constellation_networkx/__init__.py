"""Encode Walker constellations into networkx graphs for reinforcement learning.

Typical use::

    from constellation_networkx import create_constellation, add_groundstation
    from constellation_networkx import propagate, extract_graph

    c = create_constellation(66, 6, 11, 780, 86.4, 10.0, "star")
    add_groundstation(c, 49.2, 7.0, 0.3)
    propagate(c, 60_000)
    text = extract_graph(c)
"""

from constellation_networkx.api import (
    add_groundstation,
    create_constellation,
    propagate,
)
from constellation_networkx.errors import (
    ConstellationError,
    InvalidAltitude,
    InvalidCoordinate,
    InvalidStep,
    InvalidTopology,
    UnknownNode,
)
from constellation_networkx.network import (
    Constellation,
    ConstellationType,
    GroundStation,
    PropagationModel,
    Satellite,
    WalkerConfig,
    build_graph,
    extract_graph,
    extract_node_types,
    extract_positions_3d,
    parse_graph,
    project_3d_positions,
)
from constellation_networkx.simulation import iter_graphs, run_rollout

__version__ = "0.3.0"

__all__ = [
    # api.py
    "create_constellation",
    "add_groundstation",
    "propagate",
    # network
    "Constellation",
    "ConstellationType",
    "PropagationModel",
    "WalkerConfig",
    "Satellite",
    "GroundStation",
    "build_graph",
    "extract_graph",
    "parse_graph",
    "extract_positions_3d",
    "project_3d_positions",
    "extract_node_types",
    # simulation
    "iter_graphs",
    "run_rollout",
    # visualization (lazy, needs matplotlib)
    "plot_ground_track",
    # errors.py
    "ConstellationError",
    "InvalidTopology",
    "InvalidCoordinate",
    "InvalidAltitude",
    "InvalidStep",
    "UnknownNode",
]


def __getattr__(name: str):
    """Lazy import for the optional plotting dependency."""
    if name == "plot_ground_track":
        from constellation_networkx.visualization import plot_ground_track

        return plot_ground_track
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
