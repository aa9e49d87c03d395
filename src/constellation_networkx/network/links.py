"""
Visibility / Link Engine

Computes the undirected links of a constellation at its current epoch:

    - Inter-satellite links (ISLs), +Grid pattern:
        * intra-plane: each satellite to its successor in the same plane (ring)
        * inter-plane: each satellite to the same-index satellite in the next plane
    - Ground links (GSLs): station <-> satellite when the satellite's elevation
      seen from the station is at least the constellation's minimum elevation
      and the line of sight does not pass through the Earth.

Walker Star shells have counter-rotating planes at the seam and converge at
the poles, so an inter-plane link is only formed when:
    - the satellite is not in the last plane (no seam link),
    - both satellites are below POLAR_CUTOFF_DEG latitude,
    - both satellites move in the same direction (ascending/descending).

Every link is emitted once with ``u < v``, sorted by ``(u, v)``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Set, Tuple

import numpy as np

from constellation_networkx.network.walker import ConstellationType
from constellation_networkx.orbital.elements import (
    EARTH_RADIUS_KM,
    elevation_angles_deg,
    segment_clearance_km,
)

if TYPE_CHECKING:
    from constellation_networkx.network.constellation import Constellation

logger = logging.getLogger(__name__)

# Star cross-plane links are dropped above this latitude
POLAR_CUTOFF_DEG = 70.0

# Slack on the Earth-clearance test; a surface station lies on its own segment
LOS_TOLERANCE_KM = 1e-6

LINK_INTRA_PLANE = "intra_plane"
LINK_INTER_PLANE = "inter_plane"
LINK_SEAM = "seam_link"
LINK_GROUND = "ground"


@dataclass(frozen=True)
class Link:
    """An undirected, weighted link between two nodes (u < v)."""

    u: int
    v: int
    distance_km: float
    link_type: str

    @property
    def kind(self) -> str:
        """Link kind: "gsl" for ground links, "isl" otherwise."""
        return "gsl" if self.link_type == LINK_GROUND else "isl"

    @property
    def key(self) -> Tuple[int, int]:
        return self.u, self.v


@dataclass
class LinkStats:
    """Counts from one link computation for diagnostics."""

    intra_plane: int = 0
    inter_plane: int = 0
    seam_links: int = 0
    ground_links: int = 0
    rejected_star_links: int = 0

    @property
    def isl_total(self) -> int:
        return self.intra_plane + self.inter_plane + self.seam_links

    @property
    def total(self) -> int:
        return self.isl_total + self.ground_links


def _make_link(constellation: "Constellation", a: int, b: int, link_type: str) -> Link:
    u, v = (a, b) if a < b else (b, a)
    return Link(u=u, v=v, distance_km=constellation.distance(u, v), link_type=link_type)


def _star_cross_link_allowed(constellation: "Constellation", current, partner) -> bool:
    return (
        current.plane != constellation.config.planes - 1
        and abs(current.lat_deg) < POLAR_CUTOFF_DEG
        and abs(partner.lat_deg) < POLAR_CUTOFF_DEG
        and current.is_ascending == partner.is_ascending
    )


def compute_isls(constellation: "Constellation", stats: Optional[LinkStats] = None) -> List[Link]:
    """
    Compute the +Grid inter-satellite links.

    Degenerate shells never produce self-loops or duplicates: a plane with a
    single satellite has no ring, a single plane has no inter-plane links,
    and two-element rings collapse to one link.
    """
    if stats is None:
        stats = LinkStats()

    cfg = constellation.config
    links: List[Link] = []
    added_links: Set[Tuple[int, int]] = set()

    for current in constellation.satellites:
        # Intra-plane link: next satellite in same plane
        successor = constellation.satellite_at(current.plane, current.index_in_plane + 1)
        link_key = tuple(sorted([current.id, successor.id]))
        if successor.id != current.id and link_key not in added_links:
            links.append(_make_link(constellation, current.id, successor.id, LINK_INTRA_PLANE))
            stats.intra_plane += 1
            added_links.add(link_key)

        # Inter-plane link: same position in next plane
        next_plane = (current.plane + 1) % cfg.planes
        partner = constellation.satellite_at(next_plane, current.index_in_plane)
        link_key = tuple(sorted([current.id, partner.id]))
        if partner.id == current.id or link_key in added_links:
            continue

        if cfg.constellation_type is ConstellationType.STAR:
            if not _star_cross_link_allowed(constellation, current, partner):
                stats.rejected_star_links += 1
                continue

        if next_plane == 0:
            link_type = LINK_SEAM
            stats.seam_links += 1
        else:
            link_type = LINK_INTER_PLANE
            stats.inter_plane += 1
        links.append(_make_link(constellation, current.id, partner.id, link_type))
        added_links.add(link_key)

    return links


def compute_ground_links(
    constellation: "Constellation", stats: Optional[LinkStats] = None
) -> List[Link]:
    """
    Link every ground station to each satellite it sees at or above the
    minimum elevation. A station may have zero or many links.

    Line of sight is required regardless of the threshold: the segment must
    not dip below the Earth's surface (or below the station itself for a
    station under the surface), so a -90 degree threshold still excludes
    satellites behind the Earth.
    """
    if stats is None:
        stats = LinkStats()

    stations = constellation.ground_stations
    if not stations or constellation.number_of_satellites == 0:
        return []

    sat_positions = constellation.satellite_positions()
    threshold = constellation.min_elevation_deg
    links: List[Link] = []

    for station in stations:
        elevations = elevation_angles_deg(station.position, sat_positions)
        clearance = segment_clearance_km(station.position, sat_positions)
        horizon = min(EARTH_RADIUS_KM, float(np.linalg.norm(station.position)))
        visible = (elevations >= threshold) & (clearance >= horizon - LOS_TOLERANCE_KM)
        for sat_id in np.flatnonzero(visible):
            links.append(_make_link(constellation, int(sat_id), station.id, LINK_GROUND))
    stats.ground_links += len(links)
    return links


def compute_links(constellation: "Constellation") -> Tuple[List[Link], LinkStats]:
    """
    All links at the current epoch in canonical ``(u, v)`` order.

    Returns:
        Tuple of (links, stats)
    """
    stats = LinkStats()
    links = compute_isls(constellation, stats) + compute_ground_links(constellation, stats)
    links.sort(key=lambda link: link.key)

    logger.debug(
        "Links at epoch %d: intra=%d, inter=%d, seam=%d, ground=%d, rejected_star=%d",
        constellation.epoch,
        stats.intra_plane,
        stats.inter_plane,
        stats.seam_links,
        stats.ground_links,
        stats.rejected_star_links,
    )
    return links, stats
