"""
mpris-status CLI - Entry point

Fetches now-playing metadata from an MPRIS player over the session bus and
prints it for status bars.
"""

import argparse
import sys
from typing import Callable, List, Optional

from loguru import logger

from mpris_status.bus import BusError, PlayerNotRunningError, fetch_metadata
from mpris_status.commands import COMMANDS
from mpris_status.core.config import LOG_LEVELS, Config
from mpris_status.core.console import safe_print
from mpris_status.core.output import setup_loguru
from mpris_status.domain.metadata import MetadataStore, decode_metadata

COMMAND_HELP = """commands:
  track       Print "<artist> - <title>" of the current track
  metadata    Print every metadata key, type and value
"""


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="mpris-status",
        description="Print now-playing metadata from an MPRIS media player",
        epilog=COMMAND_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "command",
        nargs="?",
        metavar="command",
        help="track or metadata",
    )
    parser.add_argument(
        "--player",
        default="spotify",
        help="MPRIS player name, as in org.mpris.MediaPlayer2.<player> (default: spotify)",
    )
    parser.add_argument(
        "--capacity",
        type=int,
        default=None,
        help="Maximum number of metadata entries to keep (default: 100)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="WARNING",
        help="Minimum level for diagnostics on stderr (default: WARNING)",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write a debug log to this file",
    )

    return parser


def run_report(report: Callable[[MetadataStore], int], config: Config) -> int:
    """
    Fetch metadata, decode it into a fresh store and run a report on it.

    Args:
        report: Command handler reading the store
        config: Runtime configuration

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    try:
        metadata = fetch_metadata(config.bus)
    except PlayerNotRunningError as e:
        logger.debug(f"{config.bus.bus_name} is not on the bus: {e}")
        safe_print(f"ERROR: is {config.bus.player} running?", style="bold red", stderr=True)
        return 1
    except BusError as e:
        safe_print(f"ERROR: {e}", style="bold red", stderr=True)
        return 1

    with MetadataStore(capacity=config.store.capacity) as store:
        decode_metadata(metadata, store)
        return report(store)


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the mpris-status command."""
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args, unknown = parser.parse_known_args(argv)

    try:
        config = Config.from_args(args)
    except ValueError as e:
        parser.error(str(e))

    setup_loguru(level=config.logging.level, log_file=config.logging.log_file)

    # Only the first argument names the command; anything after it is ignored
    command = args.command
    if unknown and (command is None or argv[0] == unknown[0]):
        command = unknown[0]
    elif unknown:
        logger.debug(f"Ignoring extra arguments: {' '.join(unknown)}")

    if not command:
        parser.print_help()
        sys.exit(0)

    report = COMMANDS.get(command)
    if report is None:
        safe_print(f"ERROR: unknown command '{command}'", style="bold red", stderr=True)
        parser.print_help()
        sys.exit(0)

    sys.exit(run_report(report, config))


if __name__ == "__main__":
    main()
