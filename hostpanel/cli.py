"""
Command line entry point.

    hostpanel setup       run the full setup sequence
    hostpanel reconcile   converge pending entities
    hostpanel uninstall   run every component's uninstall tasks

Exit status: 0 on success, 1 when setup/uninstall failed, 2 when the
entity store or the configuration is unusable.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from hostpanel.config import Settings, settings as default_settings
from hostpanel.exceptions import ConfigurationError, DatabaseError, HostPanelError
from hostpanel.services.admin_service import AdminService, describe_failure
from hostpanel.utils.logging import configure_logging
from hostpanel.utils.progress import ConsoleProgress

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_UNUSABLE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hostpanel", description="Hosting panel setup and reconciliation")
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    parser.add_argument("--json-logs", action="store_true", help="emit JSON log records")
    sub = parser.add_subparsers(dest="command", required=True)

    setup = sub.add_parser("setup", help="run the full setup sequence")
    setup.add_argument("--skip-service-restart", action="store_true", help="do not restart services")
    sub.add_parser("reconcile", help="process pending DB tasks")
    sub.add_parser("uninstall", help="run component uninstall tasks")
    return parser


def _print_failure(command: str, exc: HostPanelError) -> None:
    report = describe_failure(exc)
    print(f"{command.capitalize()} failed: {report['message']}", file=sys.stderr)
    if "component" in report:
        print(f"  phase: {report['phase']}  component: {report['component']}", file=sys.stderr)


async def _run(args: argparse.Namespace, settings: Settings) -> int:
    from hostpanel.database import AsyncSessionLocal

    progress = ConsoleProgress()
    async with AsyncSessionLocal() as db:
        service = AdminService(db, settings)
        try:
            if args.command == "setup":
                await service.run_setup(progress)
                print("Setup completed")
            elif args.command == "uninstall":
                await service.run_uninstall(progress)
                print("Uninstall completed")
            else:
                summary = await service.process_tasks(progress)
                print(f"processed={summary.processed} failed={summary.failed}")
        except (DatabaseError, ConfigurationError) as exc:
            print(f"Error: {exc.message}", file=sys.stderr)
            return EXIT_UNUSABLE
        except HostPanelError as exc:
            _print_failure(args.command, exc)
            return EXIT_FAILED
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = default_settings
    if getattr(args, "skip_service_restart", False):
        settings = settings.model_copy(update={"restart_services": False})

    configure_logging("DEBUG" if args.debug else settings.log_level, "json" if args.json_logs else settings.log_format)
    return asyncio.run(_run(args, settings))


if __name__ == "__main__":
    sys.exit(main())
