"""Smoke tests for the ground-track plot."""

from __future__ import annotations

import pytest

matplotlib = pytest.importorskip("matplotlib")
matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from constellation_networkx import create_constellation, plot_ground_track  # noqa: E402
from constellation_networkx.network.graph import build_graph  # noqa: E402


def test_plot_accounts_for_every_edge() -> None:
    c = create_constellation(24, 4, 6, 780, 86.4, 10.0, "star")
    c.add_groundstation(49.25, 7.04, 0.3)
    c.propagate(300_000)

    ax, stats = plot_ground_track(c)
    try:
        edges = build_graph(c).number_of_edges()
        assert stats.links_drawn + stats.skipped_dateline == edges
        assert stats.seam_links == 0
        assert ax.get_xlim() == (-180.0, 180.0)
    finally:
        plt.close(ax.figure)


def test_plot_on_existing_axes() -> None:
    c = create_constellation(12, 3, 4, 600, 53.0, 10.0, "delta")
    fig, ax = plt.subplots()
    try:
        returned, stats = plot_ground_track(c, ax=ax)
        assert returned is ax
        assert stats.ground_links == 0
    finally:
        plt.close(fig)
