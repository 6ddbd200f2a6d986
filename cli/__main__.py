#!/usr/bin/env python3
"""
Trip Budget CLI - Track spending against a trip budget.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    trip         Show the dashboard, rename the trip, set the budget, reset
    expenses     Add, list and remove expenses
    categories   List and add categories
    migrate      Database migrations

Examples:
    python -m cli trip show
    python -m cli trip budget 1500
    python -m cli expenses add "Delta flight" 249.99 --category flights
    python -m cli categories add "Brunch" --color "#f59e0b"
    python -m cli migrate status
"""

import sys
import argparse
from cli import trip, expenses, categories, migrate
from config import load_config
from services.base import Services
from db.manager import DatabaseManager
from logger import setup_logging


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="Trip Budget - Personal trip expense tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    trip.setup_parser(subparsers)
    expenses.setup_parser(subparsers)
    categories.setup_parser(subparsers)
    migrate.setup_parser(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        try:
            config = load_config()
            setup_logging(config)

            db_manager = DatabaseManager(config)

            if args.command == "migrate":
                # Migrate commands need db_manager for raw database operations
                args.func(args, db_manager)
                return

            db_manager.migrate()

            services = Services(config, db_manager=db_manager)
            services.tracker.load()
            args.func(args, services)
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
