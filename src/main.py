"""Entry point wiring the click wheel demo to mouse or camera input."""

from __future__ import annotations

import argparse
import logging
from contextlib import ExitStack
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from src.control_types import PointerSource
from src.settings import SETTINGS_PATH, load_settings, persist_settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Browse a menu with a click wheel, by mouse or by hand.")
    parser.add_argument("--camera", action="store_true", help="Also accept pointer input from hand tracking.")
    parser.add_argument("--camera-index", type=int, default=0, help="OpenCV camera index for --camera.")
    parser.add_argument("--no-mirror", action="store_true", help="Do not mirror the camera horizontally.")
    parser.add_argument(
        "--pinch-on-threshold",
        type=float,
        default=0.35,
        help="Normalized pinch distance below which the finger counts as touching the wheel.",
    )
    parser.add_argument(
        "--pinch-off-threshold",
        type=float,
        default=0.5,
        help="Normalized pinch distance above which the finger is lifted.",
    )
    parser.add_argument(
        "--smoothing-alpha",
        type=float,
        default=0.5,
        help="EMA smoothing factor for the fingertip position (0-1, higher = snappier).",
    )
    parser.add_argument("--show-debug-overlay", action="store_true", help="Show the camera feed with the wheel ring.")
    parser.add_argument("--size", type=int, default=480, help="Wheel size in pixels.")
    parser.add_argument(
        "--tick-threshold",
        type=float,
        default=None,
        help="Degrees of rotation per tick (overrides the settings file).",
    )
    parser.add_argument("--settings", type=Path, default=SETTINGS_PATH, help="Settings file to read and update.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    settings = load_settings(args.settings)
    if args.tick_threshold is not None:
        settings = replace(settings, tick_threshold_degrees=args.tick_threshold).validate()

    # pygame and the camera stack are imported lazily so --help stays fast.
    from src.demo import WheelDemo

    with ExitStack() as stack:
        demo = WheelDemo(size=args.size, settings=settings)
        stack.callback(demo.close)
        # Remember the selection even if the loop raises.
        stack.callback(lambda: persist_settings(path=args.settings, last_selection=demo.selection))

        pointer_source: Optional[PointerSource] = None
        if args.camera:
            from src.vision import VisionPointerSource

            pointer_source = VisionPointerSource(
                camera_index=args.camera_index,
                smoothing_alpha=args.smoothing_alpha,
                mirror=not args.no_mirror,
                pinch_on_threshold=args.pinch_on_threshold,
                pinch_off_threshold=args.pinch_off_threshold,
                show_debug_overlay=args.show_debug_overlay,
            )
            stack.callback(pointer_source.close)

        demo.run(pointer_source)


if __name__ == "__main__":
    main()
