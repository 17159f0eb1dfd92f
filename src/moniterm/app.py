"""Application entry point."""

from __future__ import annotations

import argparse
import curses
import logging
import sys
from pathlib import Path

from .editor import Editor
from .hyprland import Hyprctl, MockSource
from .models import Monitor, generate_config
from .screen import CursesScreen
from .session import Session
from .utils import default_log_path, load_app_settings, save_config

log = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [moniterm] %(levelname)s %(message)s"


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="moniterm",
        description="Edit the Hyprland monitor layout from the terminal.",
    )
    parser.add_argument("--mock", action="store_true",
                        help="edit a built-in three-monitor layout instead of querying hyprctl")
    parser.add_argument("-i", "--instance",
                        help="Hyprland instance signature or index passed to hyprctl -i")
    parser.add_argument("-o", "--output", type=Path,
                        help="where to write monitors.conf (default from settings.json)")
    parser.add_argument("--no-write", action="store_true",
                        help="don't write the config file on exit")
    parser.add_argument("--print", dest="print_config", action="store_true",
                        help="print the generated config to stdout on exit")
    parser.add_argument("--log-file", type=Path,
                        help="log file (default ~/.local/state/moniterm/moniterm.log)")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def _setup_logging(args: argparse.Namespace) -> None:
    level = logging.DEBUG if args.verbose else logging.INFO
    try:
        path = args.log_file or default_log_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        logging.basicConfig(level=level, format=LOG_FORMAT, filename=str(path))
    except OSError:
        # curses owns the terminal; stay quiet below warnings on stderr
        logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT)


def edit(session: Session) -> list[Monitor]:
    """Run the interactive editor on a real terminal."""
    return curses.wrapper(lambda stdscr: Editor(CursesScreen(stdscr), session).run())


def write_config(monitors: list[Monitor], path: Path, *, backup: bool = True) -> bool:
    """Persist the arrangement. Returns False if the write failed."""
    if not monitors:
        log.warning("No monitors to save, leaving %s untouched", path)
        return True
    try:
        bak = save_config(path, generate_config(monitors), backup=backup)
    except OSError as e:
        log.error("Failed to write %s: %s", path, e)
        print(f"moniterm: cannot write {path}: {e}", file=sys.stderr)
        return False
    if bak is not None:
        log.info("Previous config saved as %s", bak)
    log.info("Wrote %d monitor(s) to %s", len(monitors), path)
    return True


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    _setup_logging(args)
    settings = load_app_settings()

    source = MockSource() if args.mock else Hyprctl(args.instance)
    if source.has_instance():
        monitors = source.get_monitors()
    else:
        log.warning("No running Hyprland instance")
        print("moniterm: no running Hyprland instance found (try --mock)", file=sys.stderr)
        monitors = []
    if not monitors:
        log.warning("No monitors reported by the display source")

    session = Session(
        monitors,
        position_step=settings["position_step"],
    )
    monitors = edit(session)

    output = args.output or Path(settings["output_path"]).expanduser()
    ok = True
    if not args.no_write:
        ok = write_config(monitors, output, backup=settings["backup"])
        if ok and monitors:
            print(f"Monitor configuration written to {output}")

    if args.print_config:
        print("\nMonitor Configuration:")
        sys.stdout.write(generate_config(monitors))

    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
