"""Temporal rollouts over a constellation."""

from constellation_networkx.simulation.rollout import (
    RolloutStep,
    iter_graphs,
    run_rollout,
)

__all__ = ["RolloutStep", "iter_graphs", "run_rollout"]
