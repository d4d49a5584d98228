#!/usr/bin/env python3
"""tracker CLI entrypoint."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, TextIO

from tracker import __version__
from tracker.db.repository import NotFound, Repository
from tracker.db.store import JSONFileStore, PersistenceFailure
from tracker.errors import TrackerError
from tracker.lib.config import ConfigError, TrackerConfig, configure_logging, load_config
from tracker.navigator import Navigator
from tracker.ui.pages import EpicDetailPage, HomePage
from tracker.ui.prompts import ConsolePrompter
from tracker.ui.render import clear_screen, draw, wait_for_key_press

logger = logging.getLogger(__name__)


def run_loop(
    navigator: Navigator,
    read_line: Callable[[], str] = input,
    out: TextIO = None,
    clear: bool = True,
) -> int:
    """Render, read, interpret, dispatch; repeat until the page stack is empty.

    Errors from rendering or from an action are reported and the loop goes
    on. End of input ends the session.
    """
    out = out or sys.stdout
    repository = navigator.repository

    while True:
        page = navigator.current_page()
        if page is None:
            return 0

        if clear:
            clear_screen(out)

        try:
            draw(page.render(repository.read()), out)
        except TrackerError as e:
            print(f"Error rendering page: {e}\nPress Enter to continue...", file=out)
            wait_for_key_press(read_line)

        try:
            line = read_line()
        except EOFError:
            logger.info("Input closed, leaving")
            return 0

        try:
            action = page.interpret(line.strip())
            if action is not None:
                navigator.handle_action(action)
        except EOFError:
            logger.info("Input closed during a prompt, leaving")
            return 0
        except TrackerError as e:
            print(f"Error handling input: {e}\nPress Enter to continue...", file=out)
            wait_for_key_press(read_line)


def build_config(args) -> TrackerConfig:
    """Load tracker.env and apply command-line overrides."""
    config = load_config(Path(args.config) if args.config else None)
    if args.db:
        config.db_path = Path(args.db)
    return config


def cmd_run(args, config: TrackerConfig) -> int:
    repository = Repository(JSONFileStore(config.db_path))
    # Surface a broken snapshot before the first screen
    repository.read()
    navigator = Navigator(repository, ConsolePrompter())
    return run_loop(navigator, clear=config.clear_screen)


def cmd_init(args, config: TrackerConfig) -> int:
    store = JSONFileStore(config.db_path)
    if store.exists() and not args.force:
        print(f"ERROR: {config.db_path} already exists. Use --force to replace it.")
        return 1
    Repository(store).reset()
    print(f"Initialized empty tracker at {config.db_path}")
    return 0


def cmd_list(args, config: TrackerConfig) -> int:
    repository = Repository(JSONFileStore(config.db_path))
    draw(HomePage(repository).render(repository.read()))
    return 0


def cmd_show(args, config: TrackerConfig) -> int:
    repository = Repository(JSONFileStore(config.db_path))
    try:
        draw(EpicDetailPage(repository, args.epic_id).render(repository.read()))
    except NotFound as e:
        print(f"ERROR: {e}")
        return 1
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog='tracker', description='Terminal tracker for epics and stories')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--db', help='Snapshot file (overrides DB_PATH)')
    parser.add_argument('--config', '-c', help='Path to tracker.env')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    parser.set_defaults(func=cmd_run)
    subparsers = parser.add_subparsers(dest='command')

    # tracker run
    p_run = subparsers.add_parser('run', help='Interactive session (default)')
    p_run.set_defaults(func=cmd_run)

    # tracker init
    p_init = subparsers.add_parser('init', help='Create an empty snapshot')
    p_init.add_argument('--force', action='store_true', help='Replace an existing snapshot')
    p_init.set_defaults(func=cmd_init)

    # tracker list
    p_list = subparsers.add_parser('list', help='Print all epics')
    p_list.set_defaults(func=cmd_list)

    # tracker show
    p_show = subparsers.add_parser('show', help='Print one epic and its stories')
    p_show.add_argument('epic_id', type=int, help='Epic ID')
    p_show.set_defaults(func=cmd_show)

    args = parser.parse_args(argv)

    try:
        config = build_config(args)
    except ConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    configure_logging(config, verbose=args.verbose)

    try:
        return args.func(args, config)
    except PersistenceFailure as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == '__main__':
    sys.exit(main())
