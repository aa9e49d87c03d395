"""Temporal rollout helpers.

Propagate a constellation step by step and hand out one fresh graph per
epoch. The constellation is mutated in place; every yielded graph is a
snapshot that stays valid after later propagation because it holds no
reference to the constellation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, List, Tuple

import networkx as nx

from constellation_networkx.errors import InvalidStep
from constellation_networkx.network.graph import build_graph
from constellation_networkx.network.links import LINK_GROUND

if TYPE_CHECKING:
    from constellation_networkx.network.constellation import Constellation

logger = logging.getLogger(__name__)


@dataclass
class RolloutStep:
    """Topology metrics at one epoch of a rollout.

    Attributes:
        t: Rollout step index (0-indexed).
        epoch: Constellation epoch at this step.
        num_nodes: Number of nodes in the graph.
        num_edges: Number of edges in the graph.
        num_ground_links: Edges with link_type "ground".
        connected: Whether the graph is connected.
    """

    t: int
    epoch: int
    num_nodes: int
    num_edges: int
    num_ground_links: int
    connected: bool


def iter_graphs(
    constellation: "Constellation",
    num_steps: int,
    step: int = 1,
) -> Iterator[Tuple[int, nx.Graph]]:
    """
    Yield ``(epoch, graph)`` for the current epoch and after each of
    ``num_steps`` propagations by ``step``.

    Example:
        >>> for epoch, G in iter_graphs(constellation, num_steps=10, step=60_000):
        ...     print(f"Epoch {epoch}: {G.number_of_edges()} edges")

    Raises:
        InvalidStep: If num_steps is negative
    """
    if num_steps < 0:
        raise InvalidStep(f"num_steps must be non-negative, got {num_steps}")

    yield constellation.epoch, build_graph(constellation)
    for _ in range(num_steps):
        constellation.propagate(step)
        yield constellation.epoch, build_graph(constellation)


def run_rollout(
    constellation: "Constellation",
    num_steps: int,
    step: int = 1,
) -> List[RolloutStep]:
    """Run a rollout and collect per-epoch topology metrics."""
    results = []
    for t, (epoch, G) in enumerate(iter_graphs(constellation, num_steps, step)):
        num_ground_links = sum(
            1 for _, _, d in G.edges(data=True) if d.get("link_type") == LINK_GROUND
        )
        connected = G.number_of_nodes() > 0 and nx.is_connected(G)
        results.append(RolloutStep(
            t=t,
            epoch=epoch,
            num_nodes=G.number_of_nodes(),
            num_edges=G.number_of_edges(),
            num_ground_links=num_ground_links,
            connected=connected,
        ))

    logger.info(
        "Rollout complete: %d steps, epoch %d -> %d",
        len(results), results[0].epoch, results[-1].epoch,
    )
    return results
