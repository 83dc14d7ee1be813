"""Entry point for the 2D mass-spring soft body demo."""
from __future__ import annotations

import argparse
import logging
import pathlib
import sys

_MODULE_DIR = pathlib.Path(__file__).resolve().parent
if str(_MODULE_DIR) not in sys.path:
    sys.path.insert(0, str(_MODULE_DIR))

from logging_config import setup_logging
from softbody2d import SoftBody2D, SoftBodyConfig

logger = logging.getLogger("main")

_PUSHES = {
    "right": ("x", 1),
    "left": ("x", -1),
    "up": ("y", 1),
    "down": ("y", -1),
}

CONTROLS = (
    "Controls: hold the left mouse button for a positive force along the selected axis, "
    "the right mouse button for a negative one. The X axis is used by default; "
    "hold Shift while pressing a button to push along Y instead. 'r' resets."
)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="2D mass-spring soft body demo")
    parser.add_argument("--width", type=float, default=1.0, help="Physical width of the sheet")
    parser.add_argument("--height", type=float, default=1.0, help="Physical height of the sheet")
    parser.add_argument("--subdivisions-x", type=int, default=10, help="Number of nodes along X")
    parser.add_argument("--subdivisions-y", type=int, default=10, help="Number of nodes along Y")
    parser.add_argument("--stiffness", type=float, default=25.0, help="Spring constant")
    parser.add_argument("--damping", type=float, default=0.5, help="Velocity damping coefficient")
    parser.add_argument("--timestep", type=float, default=0.012, help="Fixed physics time step")
    parser.add_argument(
        "--max-frame-delta",
        type=float,
        default=0.25,
        help="Largest frame delta fed to the physics after a stall",
    )
    parser.add_argument("--force", type=float, default=2.0, help="Magnitude of the external push")
    parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default="INFO",
        help="Logging verbosity",
    )
    parser.add_argument("--log-file", default=None, help="Optional file receiving the log")
    parser.add_argument(
        "--headless",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Run without a window for the given simulated duration",
    )
    parser.add_argument(
        "--frame-rate",
        type=float,
        default=60.0,
        help="Synthetic frame rate used in headless mode",
    )
    parser.add_argument(
        "--push",
        choices=tuple(_PUSHES),
        default=None,
        help="External push held during a headless run",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> SoftBodyConfig:
    return SoftBodyConfig(
        width=args.width,
        height=args.height,
        subdivisions_x=args.subdivisions_x,
        subdivisions_y=args.subdivisions_y,
        stiffness=args.stiffness,
        damping=args.damping,
        fixed_step=args.timestep,
        max_frame_delta=args.max_frame_delta,
        force_magnitude=args.force,
    )


def run_headless(softbody: SoftBody2D, duration: float, frame_rate: float, push=None) -> int:
    """Feed synthetic frame times to ``softbody``; returns the fixed steps taken."""

    if frame_rate <= 0:
        raise ValueError("frame_rate must be positive")
    if push is not None:
        softbody.set_external_input(*_PUSHES[push])

    frame_time = 1.0 / frame_rate
    n_frames = int(round(duration * frame_rate))
    start = softbody.stepper.last_time
    steps = 0
    for frame in range(1, n_frames + 1):
        steps += softbody.step(start + frame * frame_time)

    positions = softbody.positions()
    logger.info(
        "Ran %d frames, %d fixed steps; anchor row centroid %s, sheet centroid %s",
        n_frames,
        steps,
        positions[softbody.grid.anchor_row].mean(axis=0).round(5),
        positions.reshape(-1, 3).mean(axis=0).round(5),
    )
    return steps


def main(argv=None) -> None:
    args = parse_args(argv)
    setup_logging(level=args.log_level, log_file=args.log_file)

    softbody = SoftBody2D(config=build_config(args))

    if args.headless is not None:
        run_headless(softbody, args.headless, args.frame_rate, args.push)
        return

    from draw2d import Draw2D

    logger.info(CONTROLS)
    viewer = Draw2D(softbody=softbody)
    viewer.run()


if __name__ == "__main__":
    main()
