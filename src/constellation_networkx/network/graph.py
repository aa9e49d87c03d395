"""
Graph Encoder

Turns the nodes and links of a constellation at its current epoch into a
networkx graph, and that graph into networkx node-link JSON text.

Node attributes:
    kind            "satellite" | "ground_station"
    type            "S" | "G"
    label           SAT-00000 / ground station name
    plane, index_in_plane   (satellites only)

Edge attributes:
    weight          distance in km (float)
    distance_km     same as weight
    link_type       intra_plane | inter_plane | seam_link | ground
    kind            isl | gsl

The graph holds no reference back to the constellation and is stale as soon
as the constellation is mutated.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

import networkx as nx
from networkx.readwrite import json_graph

from constellation_networkx.network.links import compute_links
from constellation_networkx.network.nodes import Satellite

if TYPE_CHECKING:
    from constellation_networkx.network.constellation import Constellation

logger = logging.getLogger(__name__)

# Key under which node-link data stores the edge list
EDGES_KEY = "links"


def build_graph(constellation: "Constellation") -> nx.Graph:
    """
    Build the undirected, weighted topology graph at the current epoch.

    Nodes are inserted in id order (satellites, then ground stations) and
    edges in canonical ``(u, v)`` order.
    """
    G = nx.Graph(epoch=constellation.epoch)

    for node in constellation.nodes():
        if isinstance(node, Satellite):
            G.add_node(
                node.id,
                kind=node.kind,
                type=node.node_type,
                label=node.name,
                plane=node.plane,
                index_in_plane=node.index_in_plane,
            )
        else:
            G.add_node(
                node.id,
                kind=node.kind,
                type=node.node_type,
                label=node.name,
            )

    links, _ = compute_links(constellation)
    for link in links:
        G.add_edge(
            link.u,
            link.v,
            weight=link.distance_km,
            distance_km=link.distance_km,
            link_type=link.link_type,
            kind=link.kind,
        )

    return G


def graph_to_text(G: nx.Graph) -> str:
    """Serialize a graph as node-link JSON."""
    data = json_graph.node_link_data(G, edges=EDGES_KEY)
    return json.dumps(data)


def parse_graph(text: str) -> nx.Graph:
    """
    Parse node-link JSON produced by :func:`extract_graph`.

    Raises:
        ValueError: If the text is not valid JSON
    """
    data = json.loads(text)
    return json_graph.node_link_graph(data, edges=EDGES_KEY)


def extract_graph(constellation: "Constellation") -> str:
    """
    Serialize the current topology as networkx node-link JSON.

    ``parse_graph`` (or ``json_graph.node_link_graph(..., edges="links")``)
    reproduces the same node set, edge set and attributes.
    """
    G = build_graph(constellation)
    logger.debug(
        "Encoded graph at epoch %d: %d nodes, %d edges",
        constellation.epoch, G.number_of_nodes(), G.number_of_edges(),
    )
    return graph_to_text(G)
