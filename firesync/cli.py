"""
firesync - Main CLI interface
Synchronize local JSON files with a Firebase Realtime Database

Targets are read from a task file (``firesync.json``) and run in order;
aliases expand to several targets.
"""
import sys
import argparse
from colorama import init, Fore, Style

from . import __version__
from .context import SyncContext
from .exceptions import ConfigError
from .models.options import Mode
from .modes import select_handler
from .utils.config_loader import TaskConfig, DEFAULT_CONFIG_FILENAME
from .utils.logger import get_logger, setup_logging

# Initialize colorama
init(autoreset=True)

log = get_logger(__name__)

# ── Help-text epilogs ──────────────────────────────────────────────────────

RUN_EXAMPLES = """\
Examples:
  firesync run upload
  firesync run load upload download
  firesync run test                       # alias defined in firesync.json
  firesync run live                       # runs until Ctrl+C
  firesync run upload --mode download     # override the target's mode
  firesync --config ci/firesync.json run download
"""

LIST_EXAMPLES = """\
Examples:
  firesync list
  firesync --config ci/firesync.json list
"""


# ── Argument Parser ────────────────────────────────────────────────────────

def create_argument_parser():
    """Create and configure the subparser-based argument parser."""
    parser = argparse.ArgumentParser(
        prog='firesync',
        description='firesync: synchronize local JSON files with Firebase Realtime Database',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Global flags (apply to all subcommands)
    parser.add_argument('--config', default=None,
                        help=f'Path to the task file (default: ./{DEFAULT_CONFIG_FILENAME})')
    parser.add_argument('--verbose', action='store_true', help='Enable verbose output')
    parser.add_argument('--quiet', action='store_true', help='Only show warnings and errors')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    subparsers = parser.add_subparsers(dest='command')

    run_parser = subparsers.add_parser(
        'run',
        help='Run one or more targets or aliases',
        description='Run task targets in order, stopping at the first failure.',
        epilog=RUN_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    run_parser.add_argument('targets', nargs='+', help='Target or alias names')
    run_parser.add_argument('--mode', choices=[mode.value for mode in Mode], type=str.lower,
                            help='Override the mode of every target')

    subparsers.add_parser(
        'list',
        help='List targets and aliases',
        epilog=LIST_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    return parser


# ── Commands ───────────────────────────────────────────────────────────────

def run_targets(config, names, context=None, mode=None):
    """Run targets (aliases expanded) in order.

    Args:
        config: :class:`TaskConfig`
        names: Target or alias names
        context: :class:`SyncContext` shared by all targets (created if omitted)
        mode: Optional mode override

    Returns:
        Exit code of the first failing target, or 0
    """
    if context is None:
        context = SyncContext()

    for target in config.resolve(names):
        options = config.options_for(target, mode=mode)
        handler_cls = select_handler(options.mode)
        exit_code = handler_cls(context, target, options).execute()
        if exit_code != 0:
            log.error('Target "%s" failed. Aborting.', target)
            return exit_code

    return 0


def list_targets(config):
    """Print the targets and aliases defined in the task file."""
    if not config.targets and not config.aliases:
        print("  No targets defined.")
        return 0

    if config.targets:
        print(f"\n{Fore.CYAN}Targets:{Style.RESET_ALL}")
        for name in sorted(config.targets):
            mode = Mode.parse(config.merged_options(name).get('mode'))
            print(f"  • {name:<20} {mode.value}")

    if config.aliases:
        print(f"\n{Fore.CYAN}Aliases:{Style.RESET_ALL}")
        for name in sorted(config.aliases):
            print(f"  • {name:<20} {' → '.join(config.aliases[name])}")

    print()
    return 0


# ── Main Entry Point ──────────────────────────────────────────────────────

def main(argv=None):
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose, quiet=args.quiet)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        config = TaskConfig.load(args.config)

        if args.command == 'list':
            return list_targets(config)

        return run_targets(config, args.targets, SyncContext(), mode=args.mode)
    except ConfigError as e:
        log.error("%s", e)
        return 1
    except KeyboardInterrupt:
        print(f"\n{Fore.YELLOW}[INFO] Shutting down gracefully...{Style.RESET_ALL}")
        return 0


if __name__ == '__main__':
    sys.exit(main())
