"""Command-line interface for springease.

Resolves a spring from flags and/or an option file and prints the CSS
``linear()`` easing, a summary of the resolved constants, or the frame
values an animation loop would see.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from springease.core.config.loader import configure_logging, load_app_config, load_spring_options
from springease.core.config.models import AppConfig
from springease.core.spring.models import SpringOptions
from springease.core.spring.simulation import simulate_frames
from springease.core.spring.trajectory import SpringTrajectory, spring
from springease.core.utils.formatting import format_decimal
from springease.core.utils.logging import get_logger
from springease.core.utils.math import ms_to_seconds

console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger(__name__)


def _build_options(args: argparse.Namespace) -> SpringOptions:
    """Merge the option file (if any) with explicit flags; flags win."""
    base = load_spring_options(args.from_file) if args.from_file else SpringOptions()
    return base.merged(
        stiffness=args.stiffness,
        damping=args.damping,
        mass=args.mass,
        velocity=args.velocity,
        duration=args.duration,
        bounce=args.bounce,
        visual_duration=args.visual_duration,
        rest_speed=args.rest_speed,
        rest_delta=args.rest_delta,
        keyframes=args.keyframes,
    )


def _build_trajectory(args: argparse.Namespace, config: AppConfig) -> SpringTrajectory:
    options = _build_options(args)
    log = get_logger(__name__, command=args.cmd)
    log.debug("Spring options: %s", options.model_dump(exclude_none=True))
    return spring(
        options,
        defaults=config.spring,
        step_ms=config.easing.duration_step_ms,
        max_duration_ms=config.easing.max_duration_ms,
    )


def cmd_curve(args: argparse.Namespace, config: AppConfig) -> int:
    """Print the CSS linear() easing for the spring."""
    trajectory = _build_trajectory(args, config)
    resolution = args.resolution if args.resolution is not None else config.easing.resolution
    precision = args.precision if args.precision is not None else config.easing.precision
    easing = trajectory.to_easing(resolution, precision)

    output = easing.to_css_declaration() if args.declaration else easing.to_css()
    console.print(output, soft_wrap=True, highlight=False, markup=False)
    if args.show_duration:
        console.print(
            f"animation-duration: {format_decimal(ms_to_seconds(easing.duration_ms))}s;",
            soft_wrap=True,
            highlight=False,
            markup=False,
        )
    return 0


def cmd_inspect(args: argparse.Namespace, config: AppConfig) -> int:
    """Print the resolved constants and settling behaviour."""
    trajectory = _build_trajectory(args, config)
    resolved = trajectory.spring

    table = Table(title="Resolved spring")
    table.add_column("Property", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("stiffness", f"{resolved.stiffness:.6g}")
    table.add_row("damping", f"{resolved.damping:.6g}")
    table.add_row("mass", f"{resolved.mass:.6g}")
    table.add_row("velocity", f"{resolved.velocity:.6g}")
    table.add_row("damping ratio", f"{resolved.damping_ratio:.6g}")
    table.add_row("regime", trajectory.regime.value)
    table.add_row(
        "settles by",
        "duration" if resolved.is_resolved_from_duration else "velocity + displacement",
    )
    table.add_row("rest speed", format_decimal(trajectory.thresholds.rest_speed))
    table.add_row("rest delta", format_decimal(trajectory.thresholds.rest_delta))
    table.add_row("settling duration (ms)", format_decimal(trajectory.settling_duration))
    console.print(table)
    return 0


def cmd_frames(args: argparse.Namespace, config: AppConfig) -> int:
    """Print one value per animation frame until the spring settles."""
    trajectory = _build_trajectory(args, config)
    step = args.step if args.step is not None else config.easing.frame_step_ms
    frames = simulate_frames(trajectory, step, config.easing.max_duration_ms)

    precision = args.precision if args.precision is not None else config.easing.precision
    for value in frames:
        console.print(format_decimal(value, precision), highlight=False, markup=False)
    logger.info("Simulated %d frames at %sms", len(frames), step)
    return 0


def _add_spring_arguments(parser: argparse.ArgumentParser) -> None:
    group = parser.add_argument_group("spring")
    group.add_argument("--from", dest="from_file", help="Spring option file (.json/.yaml)")
    group.add_argument("--stiffness", type=float, help="Spring stiffness")
    group.add_argument("--damping", type=float, help="Damping coefficient")
    group.add_argument("--mass", type=float, help="Mass of the moving object")
    group.add_argument("--velocity", type=float, help="Initial velocity (units per second)")
    group.add_argument("--duration", type=float, help="Duration in ms (with --bounce)")
    group.add_argument("--bounce", type=float, help="Bounce amount, 0 = none")
    group.add_argument("--visual-duration", type=float, help="Perceived duration in seconds")
    group.add_argument("--rest-speed", type=float, help="Override rest speed threshold")
    group.add_argument("--rest-delta", type=float, help="Override rest delta threshold")
    group.add_argument(
        "--keyframes", type=float, nargs="+", help="Keyframe values (first=origin, last=target)"
    )


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="springease",
        description="springease - turn spring physics into CSS linear() easings",
    )
    p.add_argument(
        "--app-config",
        default="springease.yaml",
        help="Path to app config (default: springease.yaml, optional)",
    )
    p.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the configured log level",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    curve = sub.add_parser("curve", help="Print the CSS linear() easing")
    _add_spring_arguments(curve)
    curve.add_argument("--resolution", type=int, help="Number of samples (default: 30)")
    curve.add_argument("--precision", type=int, help="Fractional digits per value")
    curve.add_argument(
        "--declaration",
        action="store_true",
        help="Print an animation-timing-function declaration",
    )
    curve.add_argument(
        "--show-duration", action="store_true", help="Also print the animation-duration"
    )
    curve.set_defaults(handler=cmd_curve)

    inspect = sub.add_parser("inspect", help="Show resolved constants and settling time")
    _add_spring_arguments(inspect)
    inspect.set_defaults(handler=cmd_inspect)

    frames = sub.add_parser("frames", help="Print per-frame values until settled")
    _add_spring_arguments(frames)
    frames.add_argument("--step", type=float, help="Frame step in ms (default: 16.666)")
    frames.add_argument("--precision", type=int, help="Fractional digits per value")
    frames.set_defaults(handler=cmd_frames)

    return p


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    args = build_arg_parser().parse_args(argv)

    try:
        config = load_app_config(Path(args.app_config))
        if args.log_level:
            config = config.model_copy(
                update={"logging": config.logging.model_copy(update={"level": args.log_level})}
            )
        configure_logging(config)
        return args.handler(args, config)
    except (FileNotFoundError, ValueError) as e:
        err_console.print(f"[red]ERROR: {escape(str(e))}[/red]", highlight=False, soft_wrap=True)
        return 1


def run() -> None:
    """Console-script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
