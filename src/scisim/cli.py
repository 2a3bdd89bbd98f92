"""
Command-line entry point.

    scisim list
    scisim run [--scenario ID]
    scisim render SCENARIO [--frames N] [--set id=value ...] [--output PATH]
    scisim electrons Z

--theme light|dark is stored in the preferences file and used from then on.
"""

from __future__ import annotations
import argparse
import logging
import math
import sys
from pathlib import Path

from matplotlib import style as mpl_style
from matplotlib.figure import Figure

from scisim import __version__
from scisim.chemistry.electron_config import describe, electron_configuration
from scisim.config import AppConfig
from scisim.core.driver import SimulationDriver
from scisim.core.simulation import CanvasConfig
from scisim.errors import ScenarioNotFoundError
from scisim.logging_config import setup_logging
from scisim.preferences import THEME_STYLES, load_theme, save_theme, style_for
from scisim.scenarios import default_catalog
from scisim.viz.controls import format_rows
from scisim.viz.fields import save_figure

logger = logging.getLogger(__name__)

DEFAULT_FRAMES = 120


def _parameter_assignment(text: str) -> tuple[str, float]:
    name, sep, raw = text.partition("=")
    if not sep or not name:
        msg = f"expected id=value, got {text!r}"
        raise argparse.ArgumentTypeError(msg)
    try:
        value = float(raw)
    except ValueError:
        msg = f"value for {name!r} must be a number, got {raw!r}"
        raise argparse.ArgumentTypeError(msg) from None
    if not math.isfinite(value):
        msg = f"value for {name!r} must be finite, got {raw!r}"
        raise argparse.ArgumentTypeError(msg)
    return name.strip(), value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="scisim", description="Interactive science simulations.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--theme",
        choices=sorted(THEME_STYLES),
        help="UI theme; the choice is saved for later sessions",
    )
    parser.add_argument("--log-level", help="Logging level (default: SCISIM_LOG_LEVEL or INFO)")
    parser.add_argument("--log-file", type=Path, help="Also log to this rotating file")

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("list", help="List the available scenarios")

    run = commands.add_parser("run", help="Open the interactive app")
    run.add_argument("--scenario", help="Scenario to show first")

    render = commands.add_parser("render", help="Run a scenario headless and save a PNG")
    render.add_argument("scenario", help="Scenario id (see 'scisim list')")
    render.add_argument("--frames", type=int, default=DEFAULT_FRAMES, help="Frames to simulate")
    render.add_argument(
        "--set",
        dest="assignments",
        type=_parameter_assignment,
        action="append",
        default=[],
        metavar="ID=VALUE",
        help="Set a parameter before running (repeatable)",
    )
    render.add_argument("--output", type=Path, help="PNG path (default: <scenario>.png)")

    electrons = commands.add_parser("electrons", help="Print an electron configuration")
    electrons.add_argument("atomic_number", type=int, help="Atomic number Z (1-118)")

    return parser


def cmd_list(config: AppConfig) -> int:
    for scenario in default_catalog():
        print(f"{scenario.id:<20} {scenario.group:<8} {scenario.title}")
    return 0


def cmd_run(config: AppConfig, theme: str, scenario: str | None) -> int:
    # Only the interactive command needs the widget stack
    from scisim.viz.app import launch

    if scenario:
        config.default_scenario = scenario
    launch(config, theme=theme)
    return 0


def cmd_render(
    config: AppConfig,
    theme: str,
    scenario_id: str,
    frames: int,
    assignments: list[tuple[str, float]],
    output: Path | None,
) -> int:
    canvas = CanvasConfig(config.canvas_width, config.canvas_height)
    with mpl_style.context(style_for(theme)):
        fig = Figure(figsize=(canvas.width / 100, canvas.height / 100))
        ax = fig.add_axes([0, 0, 1, 1])
    driver = SimulationDriver(default_catalog(), canvas, ax)

    simulation = driver.select(scenario_id)
    if simulation is None:
        print(f"error: {driver.failure}", file=sys.stderr)
        return 1
    for param_id, value in assignments:
        if param_id not in simulation.parameters:
            logger.warning("%s has no parameter %r", scenario_id, param_id)
        driver.set_parameter(param_id, value)

    simulation.start()
    completed = driver.run(frames)
    if driver.failed:
        print(f"error: {driver.failure}", file=sys.stderr)
        return 1
    if completed == 0:
        # Nothing ran; still paint the initial state
        simulation.draw(ax)

    path = output or Path(f"{scenario_id}.png")
    save_figure(fig, path)
    print(format_rows(simulation.data_to_display()))
    print(f"saved {path}")
    return 0


def cmd_electrons(atomic_number: int) -> int:
    try:
        config = electron_configuration(atomic_number)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(f"Z = {atomic_number}")
    print(config.notation)
    for shell in config.shells:
        print(f"  {shell.name} (n={shell.n}): {shell.electrons}")
    print(describe(atomic_number))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = AppConfig.from_env()
        setup_logging(level=args.log_level or config.log_level, log_file=args.log_file or config.log_file)
    except ValueError as exc:
        # Bad SCISIM_* variable or unknown log level
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.theme:
        save_theme(config.preferences_path, args.theme)
        theme = args.theme
    else:
        theme = load_theme(config.preferences_path)

    try:
        if args.command == "list":
            return cmd_list(config)
        if args.command == "run":
            return cmd_run(config, theme, args.scenario)
        if args.command == "render":
            return cmd_render(config, theme, args.scenario, args.frames, args.assignments, args.output)
        return cmd_electrons(args.atomic_number)
    except ScenarioNotFoundError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
