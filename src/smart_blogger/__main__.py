# ABOUTME: CLI entry point for the Smart Blogger feed importer.
# ABOUTME: Provides subcommands: init-db, run, run-due, install, uninstall, config.

import argparse
import sys

import structlog

from smart_blogger.config import CATEGORY_KEY, FEED_URLS_KEY, KEYWORDS_KEY
from smart_blogger.logging_config import configure_logging

CONFIG_KEYS = (FEED_URLS_KEY, KEYWORDS_KEY, CATEGORY_KEY)


def cmd_init_db(_args: argparse.Namespace) -> int:
    """Create database tables and the default category."""
    from smart_blogger.db.session import init_db

    log = structlog.get_logger()
    try:
        init_db()
    except Exception:
        log.exception("cmd_init_db_failed")
        return 1
    return 0


def cmd_run(_args: argparse.Namespace) -> int:
    """Run one import now, regardless of the schedule."""
    from smart_blogger.services.import_service import run_import

    log = structlog.get_logger()
    log.info("cmd_run_start")

    try:
        report = run_import()
    except Exception:
        log.exception("cmd_run_failed")
        return 1

    log.info("cmd_run_complete", published=report.published, failed_feeds=report.feeds_failed)
    return 0


def cmd_run_due(_args: argparse.Namespace) -> int:
    """Run scheduled jobs whose interval has elapsed.

    Meant to be called frequently by cron or a systemd timer.
    """
    from smart_blogger.db.session import get_session
    from smart_blogger.scheduling import run_due_jobs
    from smart_blogger.services.import_service import job_registry

    log = structlog.get_logger()

    try:
        with get_session() as session:
            ran = run_due_jobs(session, job_registry())
    except Exception:
        log.exception("cmd_run_due_failed")
        return 1

    log.info("cmd_run_due_complete", jobs=ran)
    return 0


def cmd_install(_args: argparse.Namespace) -> int:
    """Register the hourly import job."""
    from smart_blogger.services.import_service import install

    log = structlog.get_logger()
    try:
        created = install()
    except Exception:
        log.exception("cmd_install_failed")
        return 1

    print("Import job scheduled." if created else "Import job already scheduled.")
    return 0


def cmd_uninstall(_args: argparse.Namespace) -> int:
    """Remove the hourly import job."""
    from smart_blogger.services.import_service import uninstall

    log = structlog.get_logger()
    try:
        removed = uninstall()
    except Exception:
        log.exception("cmd_uninstall_failed")
        return 1

    print("Import job removed." if removed else "Import job was not scheduled.")
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    """Show or change the pipeline options."""
    from smart_blogger.db.repository import OptionRepository
    from smart_blogger.db.session import get_session

    log = structlog.get_logger()

    try:
        with get_session() as session:
            options = OptionRepository(session)
            if args.config_command == "set":
                options.set(args.key, args.value)
                log.info("option_updated", key=args.key)
                return 0

            print("\n=== Smart Blogger Settings ===\n")
            for key in CONFIG_KEYS:
                value = options.get(key, "")
                print(f"{key}:")
                for line in str(value).splitlines() or [""]:
                    print(f"  {line}")
            print()
    except Exception:
        log.exception("cmd_config_failed")
        return 1

    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="smart_blogger",
        description="Smart Blogger - import, rewrite and publish posts from RSS feeds",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("init-db", help="Create database tables")
    subparsers.add_parser("run", help="Run one import now")
    subparsers.add_parser("run-due", help="Run scheduled jobs that are due")
    subparsers.add_parser("install", help="Schedule the hourly import")
    subparsers.add_parser("uninstall", help="Remove the hourly import")

    # config command
    config_parser = subparsers.add_parser("config", help="Show or change settings")
    config_sub = config_parser.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Show current settings")
    set_parser = config_sub.add_parser("set", help="Change a setting")
    set_parser.add_argument("key", choices=CONFIG_KEYS)
    set_parser.add_argument("value")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    configure_logging()

    parser = create_parser()
    args = parser.parse_args(argv)

    commands = {
        "init-db": cmd_init_db,
        "run": cmd_run,
        "run-due": cmd_run_due,
        "install": cmd_install,
        "uninstall": cmd_uninstall,
        "config": cmd_config,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
