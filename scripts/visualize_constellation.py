#!/usr/bin/env python3
"""
Visualize Satellite Constellation Map

Generates a 2D ground-track map of a Walker constellation showing:
- Satellite positions as blue dots, ground stations as green triangles
- ISL links as gray lines (seam links in red), ground links in green
- Handles dateline crossing by skipping problematic links

Usage:
    python scripts/visualize_constellation.py
    python scripts/visualize_constellation.py --type star --planes 6 --ipc 11 --inclination 86.4
"""

import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"

if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

import matplotlib.pyplot as plt  # noqa: E402

from constellation_networkx import create_constellation  # noqa: E402
from constellation_networkx.visualization import plot_ground_track  # noqa: E402


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Plot a Walker constellation ground-track map",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--type", default="delta", choices=["star", "delta"])
    parser.add_argument("--planes", type=int, default=24, help="Number of orbital planes")
    parser.add_argument("--ipc", type=int, default=24, help="Satellites per plane")
    parser.add_argument("--altitude", type=float, default=550.0, help="Altitude in km")
    parser.add_argument("--inclination", type=float, default=53.0, help="Inclination in degrees")
    parser.add_argument("--min-elevation", type=float, default=25.0, help="Minimum elevation in degrees")
    parser.add_argument(
        "--station",
        type=float,
        nargs=2,
        action="append",
        metavar=("LAT", "LON"),
        help="Ground station position (repeatable)",
    )
    parser.add_argument("--step", type=int, default=0, help="Steps (ms) to propagate before plotting")
    parser.add_argument(
        "--output",
        type=str,
        default=str(PROJECT_ROOT / "constellation_map.png"),
        help="Output image path",
    )
    return parser.parse_args()


def main():
    """Generate constellation visualization."""
    args = parse_args()

    print("=" * 60)
    print("Constellation Visualization")
    print("=" * 60)

    print(f"\n[1/3] Building Walker {args.type} ({args.planes} planes x {args.ipc} sats)...")
    constellation = create_constellation(
        args.planes * args.ipc,
        args.planes,
        args.ipc,
        args.altitude,
        args.inclination,
        args.min_elevation,
        args.type,
    )
    for lat, lon in args.station or []:
        constellation.add_groundstation(lat, lon, 0.0)
    print(constellation.summary())

    print(f"\n[2/3] Propagating {args.step} steps...")
    constellation.propagate(args.step)

    print("\n[3/3] Generating plot...")
    ax, stats = plot_ground_track(constellation)
    plt.tight_layout()
    plt.savefig(args.output, dpi=150, bbox_inches="tight")
    print(f"\n✓ Saved high-res image to: {args.output}")

    print("\nStatistics:")
    print(f"  Links drawn: {stats.links_drawn}")
    print(f"  Seam links (red): {stats.seam_links}")
    print(f"  Ground links (green): {stats.ground_links}")
    print(f"  Skipped (dateline crossing): {stats.skipped_dateline}")

    print("\n" + "=" * 60)
    print("Visualization complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
