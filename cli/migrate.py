#!/usr/bin/env python3

from logger import get_logger

logger = get_logger()


def cmd_status(args, db_manager):
    """Show which store migrations are applied."""
    if not db_manager.get_db_path().exists():
        logger.info(
            "Store does not exist yet. Run 'python -m cli migrate apply' to create it."
        )
        return

    available = db_manager.available_migrations()
    if not available:
        logger.info("No migrations found.")
        return

    applied = set(db_manager.applied_migrations())

    logger.info(f"Store: {db_manager.get_db_path()}")
    logger.info("=" * 80)
    for migration in available:
        logger.info(f"{migration}: {'APPLIED' if migration in applied else 'PENDING'}")

    logger.info(f"\nApplied: {len(applied)} / {len(available)}")


def cmd_apply(args, db_manager):
    """Apply pending store migrations."""
    applied = db_manager.migrate()

    if not applied:
        logger.info("Store schema is up to date.")
        return

    for migration in applied:
        logger.info(f"✓ Applied {migration}")


def setup_parser(subparsers):
    """Setup migrate subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "migrate",
        help="Store schema migrations",
        description="Inspect and apply schema migrations of the local store",
    )

    migrate_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available migration commands",
        dest="subcommand",
        required=True,
    )

    status_parser = migrate_subparsers.add_parser(
        "status", help="Show migration status"
    )
    status_parser.set_defaults(func=cmd_status)

    apply_parser = migrate_subparsers.add_parser(
        "apply", help="Apply pending migrations"
    )
    apply_parser.set_defaults(func=cmd_apply)
