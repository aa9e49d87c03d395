"""Constellation model, link engine and exporters.

Pure functions over a Constellation: no module here performs I/O.
"""

from constellation_networkx.network.constellation import Constellation
from constellation_networkx.network.graph import (
    build_graph,
    extract_graph,
    graph_to_text,
    parse_graph,
)
from constellation_networkx.network.links import (
    Link,
    LinkStats,
    compute_ground_links,
    compute_isls,
    compute_links,
)
from constellation_networkx.network.nodes import GroundStation, Satellite
from constellation_networkx.network.positions import (
    extract_node_types,
    extract_positions_3d,
    project_3d_positions,
)
from constellation_networkx.network.walker import (
    ConstellationType,
    PropagationModel,
    WalkerConfig,
)

__all__ = [
    # constellation.py
    "Constellation",
    # nodes.py
    "Satellite",
    "GroundStation",
    # walker.py
    "ConstellationType",
    "PropagationModel",
    "WalkerConfig",
    # links.py
    "Link",
    "LinkStats",
    "compute_isls",
    "compute_ground_links",
    "compute_links",
    # graph.py
    "build_graph",
    "extract_graph",
    "graph_to_text",
    "parse_graph",
    # positions.py
    "extract_positions_3d",
    "project_3d_positions",
    "extract_node_types",
]
