"""
Command line entry point: compute, optionally save, and display a Reuleaux tetrahedron mesh.
"""

import argparse
import logging
from typing import Optional, Sequence

from reuleauxmesh.constants import DEFAULT_N_STEPS, DEFAULT_WARP
from reuleauxmesh.errors import ReuleauxMeshError
from reuleauxmesh.logging_config import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reuleauxmesh",
        description="Mesh a Reuleaux tetrahedron inscribed in the unit sphere.",
    )
    parser.add_argument(
        "--n-steps",
        type=int,
        default=DEFAULT_N_STEPS,
        help="Samples along each edge of a face, conventionally a power of 2 (default: %(default)s)",
    )
    parser.add_argument(
        "--warp",
        type=float,
        default=DEFAULT_WARP,
        help="Warp exponent of the barycentric sampling (default: %(default)s)",
    )
    parser.add_argument(
        "--scale",
        type=float,
        default=1.0,
        help="Multiply all coordinates by this factor, e.g. 9 for a circumradius of 9",
    )
    parser.add_argument(
        "--output",
        "-o",
        default=None,
        help="Write the mesh to this file; the extension picks the format (.stl, .ply, .vtp, .vtk, .obj)",
    )
    parser.add_argument(
        "--display",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Show the mesh in a window",
    )
    parser.add_argument(
        "--backend",
        default="auto",
        choices=["auto", "pyvista", "matplotlib"],
        help="Display backend",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(getattr(logging, args.log_level))

    from reuleauxmesh.reuleaux_tetrahedron import mesh_reuleaux_tetrahedron

    try:
        mesh = mesh_reuleaux_tetrahedron(n_steps=args.n_steps, warp=args.warp)
    except ReuleauxMeshError as e:
        logger.error("%s", e)
        parser.exit(2)

    if args.scale != 1.0:
        mesh = mesh.scale(args.scale)
    if args.output:
        mesh.save(args.output)
    if args.display:
        mesh.draw(backend=args.backend)
    return 0
