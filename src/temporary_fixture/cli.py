"""Command-line interface for temporary fixtures."""

import argparse
import logging
import os
import sys
import traceback
from typing import Optional, List

from temporary_fixture.config import Config, DEFAULT_CONFIG_FILE
from temporary_fixture.core.materializer import make
from temporary_fixture.models.fixture import Fixture, FixtureType, raw_to_type
from temporary_fixture.utils.file_utils import FileUtils
from temporary_fixture.utils.fixture_loader import load_fixture_file
from temporary_fixture.utils.user_feedback import UserFeedback
from temporary_fixture.exceptions import TemporaryFixtureError


def configure_logging(verbose: bool = False, quiet: bool = False):
    """Configure logging based on verbosity level."""
    if quiet:
        logging.basicConfig(level=logging.ERROR, format='%(message)s')
    elif verbose:
        # Full logging with timestamps in verbose mode
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
    else:
        logging.basicConfig(
            level=logging.WARNING,
            format='%(levelname)s: %(message)s'
        )

logger = logging.getLogger(__name__)


def setup_argparse() -> argparse.ArgumentParser:
    """Set up command line argument parser."""
    parser = argparse.ArgumentParser(
        prog="temporary-fixture",
        description="Create directory trees from YAML fixture descriptions",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        "mode",
        choices=['make', 'show', 'init-config'],
        help="Mode of operation"
    )
    parser.add_argument(
        "fixture_file",
        nargs='?',
        help="YAML fixture description (required for 'make' and 'show')"
    )
    parser.add_argument(
        "--target",
        help="Directory to create; its parent must be the current or the temp directory. "
             "A new temporary directory is allocated when omitted."
    )
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_FILE,
        help=f"Configuration file (default: {DEFAULT_CONFIG_FILE})"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose output")
    parser.add_argument("--quiet", "-q", action="store_true", help="Only print errors and results")

    return parser


def validate_arguments(args, parser: argparse.ArgumentParser) -> None:
    if args.mode in ('make', 'show') and not args.fixture_file:
        parser.error(f"the '{args.mode}' mode requires a fixture file")
    if args.target and args.mode != 'make':
        parser.error("--target is only valid in 'make' mode")


def handle_init_config_mode(args, feedback: UserFeedback) -> None:
    """Write a sample configuration file."""
    if os.path.exists(args.config):
        feedback.warning(
            f"Configuration file already exists: {args.config}",
            "Remove it first to create a fresh sample."
        )
        return
    Config(config_file=None).create_sample_config(args.config)
    feedback.success(f"Configuration created at {args.config}")


def handle_show_mode(args, feedback: UserFeedback) -> None:
    """Validate a fixture file and display its tree."""
    fixture = load_fixture_file(args.fixture_file)
    feedback.fixture_tree(args.fixture_file, fixture)
    feedback.success("Fixture is valid")


def handle_make_mode(args, config: Config, feedback: UserFeedback) -> str:
    """Materialize a fixture file and return the created root."""
    fixture = load_fixture_file(args.fixture_file)

    with feedback.status_spinner("Creating fixture"):
        if args.target:
            root = make(args.target, fixture, encoding=config.get('fixtures.encoding'))
        else:
            root = FileUtils.create_temp_root(config.get('fixtures.temp_prefix'))
            make(root, fixture, encoding=config.get('fixtures.encoding'))

    feedback.fixture_tree(root, fixture)
    feedback.summary_panel("Fixture Created", {
        "Source": args.fixture_file,
        "Root": root,
        "Entries": count_entries(fixture.content),
    })
    feedback.result(root)
    return root


def count_entries(entries) -> int:
    """Count the nodes below a directory mapping."""
    total = 0
    for entry in entries.values():
        total += 1
        if raw_to_type(entry) is FixtureType.DIR:
            total += count_entries(entry.content if isinstance(entry, Fixture) else entry)
    return total


def main(argv: Optional[List[str]] = None):
    """Main execution function."""
    feedback = None

    try:
        parser = setup_argparse()
        args = parser.parse_args(argv)
        validate_arguments(args, parser)

        feedback = UserFeedback(verbose=args.verbose, quiet=args.quiet)
        configure_logging(verbose=args.verbose, quiet=args.quiet)

        if args.mode == 'init-config':
            handle_init_config_mode(args, feedback)
            return

        config = Config(args.config)
        config.validate()

        if args.mode == 'show':
            handle_show_mode(args, feedback)
        else:
            handle_make_mode(args, config, feedback)

    except KeyboardInterrupt:
        if feedback:
            feedback.warning("Operation cancelled by user")
        else:
            print("\nOperation cancelled by user")
        sys.exit(130)  # Standard exit code for Ctrl+C

    except TemporaryFixtureError as e:
        if feedback:
            feedback.error(e.message, e.suggestion)
        else:
            print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    except Exception as e:
        if feedback:
            feedback.error(f"Unexpected error: {e}",
                           "This appears to be a bug. Please report it with the details below.")
            if feedback.verbose:
                feedback.error("Full traceback:", details=traceback.format_exc())
        else:
            print(f"Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)
