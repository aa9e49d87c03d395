"""
Position Projector

Per-node coordinate maps at the current epoch:

    extract_positions_3d   node id -> (x, y, z) Earth-fixed Cartesian, km
    project_3d_positions   node id -> (lat_deg, lon_deg, alt_km)

The projection is equirectangular with altitude kept as the third
coordinate: plotting (lon, lat) gives a ground-track map. Latitude and
longitude are geocentric on the spherical Earth; longitude is in [-180, 180).
Both maps cover exactly the same node ids, in id order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Tuple

from constellation_networkx.orbital.elements import ecef_to_geocentric

if TYPE_CHECKING:
    from constellation_networkx.network.constellation import Constellation

Position = Tuple[float, float, float]


def extract_positions_3d(constellation: "Constellation") -> Dict[int, Position]:
    """Earth-fixed Cartesian position of every node."""
    return {
        node.id: tuple(float(c) for c in node.position)
        for node in constellation.nodes()
    }


def project_3d_positions(constellation: "Constellation") -> Dict[int, Position]:
    """(lat, lon, alt) of every node."""
    return {
        node.id: ecef_to_geocentric(node.position)
        for node in constellation.nodes()
    }


def extract_node_types(constellation: "Constellation") -> Dict[int, str]:
    """Node type tag: "S" for satellites, "G" for ground stations."""
    return {node.id: node.node_type for node in constellation.nodes()}
