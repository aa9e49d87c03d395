"""
Ground-track map of a constellation.

Draws the equirectangular projection from ``project_3d_positions``:
satellites as blue dots, ground stations as green triangles, ISLs in gray
(seam links in red) and ground links in green. Links crossing the dateline
are skipped since they would smear across the whole map.

Requires matplotlib (``pip install constellation-networkx[viz]``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.lines import Line2D

from constellation_networkx.network.graph import build_graph
from constellation_networkx.network.links import LINK_GROUND, LINK_SEAM
from constellation_networkx.network.positions import (
    extract_node_types,
    project_3d_positions,
)

if TYPE_CHECKING:
    from constellation_networkx.network.constellation import Constellation


@dataclass
class PlotStats:
    """What ended up on the map."""

    links_drawn: int = 0
    seam_links: int = 0
    ground_links: int = 0
    skipped_dateline: int = 0


def plot_ground_track(constellation: "Constellation", ax=None):
    """
    Plot the constellation at its current epoch.

    Args:
        constellation: Constellation to draw
        ax: Matplotlib axes (default: a new 16x8 figure)

    Returns:
        Tuple of (ax, PlotStats)
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(16, 8), dpi=150)

    projected = project_3d_positions(constellation)
    node_types = extract_node_types(constellation)
    graph = build_graph(constellation)
    stats = PlotStats()

    ax.set_xlim(-180, 180)
    ax.set_ylim(-90, 90)
    ax.set_xlabel("Longitude (°)", fontsize=12)
    ax.set_ylabel("Latitude (°)", fontsize=12)
    cfg = constellation.config
    ax.set_title(
        f"Walker {cfg.constellation_type.value.capitalize()} "
        f"({cfg.planes} planes × {cfg.ipc} sats = {cfg.satellites} satellites), "
        f"epoch {constellation.epoch}",
        fontsize=14,
        fontweight="bold",
    )

    ax.set_facecolor("#e6f2ff")
    ax.grid(True, linestyle="--", alpha=0.5, color="gray")
    ax.set_xticks(np.arange(-180, 181, 30))
    ax.set_yticks(np.arange(-90, 91, 30))
    ax.axhline(y=0, color="darkgray", linewidth=1.0, linestyle="-")
    ax.axvline(x=0, color="darkgray", linewidth=1.0, linestyle="-")

    for u, v, data in graph.edges(data=True):
        lat1, lon1, _ = projected[u]
        lat2, lon2, _ = projected[v]

        if abs(lon1 - lon2) > 180:
            stats.skipped_dateline += 1
            continue

        link_type = data.get("link_type")
        if link_type == LINK_SEAM:
            ax.plot([lon1, lon2], [lat1, lat2], color="red", linewidth=0.8, alpha=0.7, zorder=2)
            stats.seam_links += 1
        elif link_type == LINK_GROUND:
            ax.plot([lon1, lon2], [lat1, lat2], color="green", linewidth=0.5, alpha=0.6, zorder=2)
            stats.ground_links += 1
        else:
            ax.plot([lon1, lon2], [lat1, lat2], color="gray", linewidth=0.3, alpha=0.5, zorder=1)
        stats.links_drawn += 1

    sat_ids = [n for n, t in node_types.items() if t == "S"]
    gs_ids = [n for n, t in node_types.items() if t == "G"]
    if sat_ids:
        ax.scatter(
            [projected[n][1] for n in sat_ids],
            [projected[n][0] for n in sat_ids],
            c="blue", s=2, zorder=3,
        )
    if gs_ids:
        ax.scatter(
            [projected[n][1] for n in gs_ids],
            [projected[n][0] for n in gs_ids],
            c="green", marker="^", s=30, zorder=4,
        )

    legend_elements = [
        Line2D([0], [0], marker="o", color="w", markerfacecolor="blue", markersize=6, label="Satellite"),
        Line2D([0], [0], marker="^", color="w", markerfacecolor="green", markersize=8, label="Ground station"),
        Line2D([0], [0], color="gray", linewidth=1, label="ISL Link"),
        Line2D([0], [0], color="red", linewidth=1.5, label="Seam Link"),
        Line2D([0], [0], color="green", linewidth=1, label="Ground Link"),
    ]
    ax.legend(handles=legend_elements, loc="lower left", fontsize=10)

    ax.annotate(
        f"Links drawn: {stats.links_drawn}\n"
        f"Seam links: {stats.seam_links}\n"
        f"Ground links: {stats.ground_links}\n"
        f"Skipped (dateline): {stats.skipped_dateline}",
        xy=(0.99, 0.02),
        xycoords="axes fraction",
        fontsize=9,
        ha="right",
        va="bottom",
        bbox=dict(boxstyle="round,pad=0.3", facecolor="white", alpha=0.8),
    )

    return ax, stats
