"""Command line entry point for store maintenance jobs.

Usage: python -m dashboard.maintenance {check,cleanup-orphans,migrate-legacy} [--user USER_ID]
"""

import argparse
import asyncio
import logging

from sqlalchemy import select

from dashboard.db.session import AsyncSessionLocal, engine
from dashboard.db.settings import get_settings
from dashboard.models.budget_transaction import BudgetTransaction
from dashboard.services.maintenance import cleanup_orphaned_instances, describe_store, migrate_legacy_transactions
from dashboard.services.month import current_month_key, parse_month_key
from dashboard.services.store import DashboardStore

logger = logging.getLogger("dashboard.maintenance")


def month_argument(value: str) -> str:
    try:
        parse_month_key(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc
    return value


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(prog="python -m dashboard.maintenance")
    parser.add_argument("--user", default=settings.default_user_id, help="user id to operate on")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("check", help="print template and month bucket counts")
    commands.add_parser("cleanup-orphans", help="remove instances whose template no longer exists")
    migrate = commands.add_parser("migrate-legacy", help="convert flat budget transactions into templates")
    migrate.add_argument("--month", type=month_argument, default=None, help="target month (YYYY-MM)")
    return parser


async def run(args: argparse.Namespace) -> None:
    settings = get_settings()
    async with AsyncSessionLocal() as session:
        store = DashboardStore(session, max_write_attempts=settings.bucket_write_attempts)

        if args.command == "check":
            report = await describe_store(store, args.user)
            logger.info(
                "%s: %d templates, %d months, %d instances, %d orphaned",
                args.user,
                report.templates,
                report.months,
                report.instances,
                report.orphaned_instances,
            )
        elif args.command == "cleanup-orphans":
            removed = await cleanup_orphaned_instances(store, args.user)
            logger.info("Removed %d orphaned instances", sum(removed.values()))
        elif args.command == "migrate-legacy":
            rows = await session.scalars(
                select(BudgetTransaction)
                .where(BudgetTransaction.user_id == args.user)
                .order_by(BudgetTransaction.id.asc())
            )
            await migrate_legacy_transactions(store, args.user, rows.all(), args.month or current_month_key())

    await engine.dispose()


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=get_settings().log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    asyncio.run(run(args))


if __name__ == "__main__":
    main()
