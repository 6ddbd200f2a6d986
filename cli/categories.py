#!/usr/bin/env python3

from logger import get_logger
from tools.formatting import format_currency

logger = get_logger()


def cmd_list(args, services):
    """List all categories with their spend."""
    tracker = services.tracker

    logger.info("\nCategories:")
    logger.info("=" * 80)
    for category in tracker.by_category:
        logger.info(
            f"{category.key:<20} {category.label:<30} {category.color:<10} "
            f"{format_currency(category.total):>12}"
        )

    logger.info(f"\nTotal categories: {len(tracker.categories)}")


def cmd_add(args, services):
    """Add a new category."""
    category = services.tracker.add_category(args.label, args.color)

    if category is None:
        logger.error(
            f"Category '{args.label}' not added (empty label or key already exists)."
        )
        return

    logger.info(f"✓ Category '{category.label}' added with key '{category.key}'")
    logger.info(f"  Color: {category.color}")


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="Manage categories",
        description="List and add spending categories",
    )

    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    # categories list
    list_parser = categories_subparsers.add_parser("list", help="List all categories")
    list_parser.set_defaults(func=cmd_list)

    # categories add
    add_parser = categories_subparsers.add_parser("add", help="Add a category")
    add_parser.add_argument("label", help="Category label, e.g. 'Brunch'")
    add_parser.add_argument(
        "--color",
        default=None,
        help="Hex color (defaults to a random palette color)",
    )
    add_parser.set_defaults(func=cmd_add)
