"""Roll a constellation forward and write one node-link JSON graph per epoch.

Usage:
    python scripts/simulate.py --steps 10 --step 60000
"""

import argparse
import logging
import sys
from pathlib import Path

# --- Make sure Python can see the `src` folder ---
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"

if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

# --- Now normal imports work ---
from constellation_networkx import create_constellation, iter_graphs  # noqa: E402
from constellation_networkx.network.graph import graph_to_text  # noqa: E402

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Export per-epoch constellation graphs",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--type", default="star", choices=["star", "delta"])
    parser.add_argument("--satellites", type=int, default=66)
    parser.add_argument("--planes", type=int, default=6)
    parser.add_argument("--altitude", type=float, default=780.0, help="Altitude in km")
    parser.add_argument("--inclination", type=float, default=86.4, help="Inclination in degrees")
    parser.add_argument("--min-elevation", type=float, default=10.0, help="Minimum elevation in degrees")
    parser.add_argument("--steps", type=int, default=10, help="Number of propagation steps")
    parser.add_argument("--step", type=int, default=60_000, help="Step size in ms")
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Output directory (default: data/graphs in project root)",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    if args.satellites % args.planes != 0:
        raise SystemExit("--satellites must be divisible by --planes")
    constellation = create_constellation(
        args.satellites,
        args.planes,
        args.satellites // args.planes,
        args.altitude,
        args.inclination,
        args.min_elevation,
        args.type,
    )
    # A few well-known gateway sites
    constellation.add_groundstation(49.2545, 7.0424, 0.3, name="Saarbruecken")
    constellation.add_groundstation(64.8378, -147.7164, 0.1, name="Fairbanks")
    constellation.add_groundstation(-33.9249, 18.4241, 0.0, name="Cape Town")

    out_dir = Path(args.output_dir) if args.output_dir else PROJECT_ROOT / "data" / "graphs"
    out_dir.mkdir(parents=True, exist_ok=True)

    for epoch, G in iter_graphs(constellation, args.steps, args.step):
        path = out_dir / f"graph_{epoch:012d}.json"
        path.write_text(graph_to_text(G))
        logger.info(
            "Epoch %d: %d nodes, %d edges -> %s",
            epoch, G.number_of_nodes(), G.number_of_edges(), path.name,
        )


if __name__ == "__main__":
    main()
