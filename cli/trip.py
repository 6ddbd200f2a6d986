#!/usr/bin/env python3

from logger import get_logger
from tools.formatting import category_label, format_currency, pretty_date

logger = get_logger()

_BAR_WIDTH = 40


def _progress_bar(percent) -> str:
    filled = int(percent / 100 * _BAR_WIDTH)
    return "[" + "#" * filled + "-" * (_BAR_WIDTH - filled) + "]"


def cmd_show(args, services):
    """Show the trip dashboard."""
    tracker = services.tracker
    summary = tracker.summary()

    logger.info(f"\n{tracker.trip.name}")
    logger.info("=" * 80)
    logger.info(f"Budget:      {format_currency(tracker.trip.budget)}")
    logger.info(f"Total Spent: {format_currency(summary.total_spent)}")
    logger.info(f"Remaining:   {format_currency(summary.remaining)}")
    logger.info(f"{_progress_bar(summary.percent_used)} {summary.percent_used:.0f}%")

    logger.info("\nCategory Breakdown:")
    logger.info("-" * 80)
    for category in summary.by_category:
        logger.info(f"  {category.label:<30} {format_currency(category.total):>12}")

    if summary.chart_data:
        logger.info("\nChart:")
        for slice_ in summary.chart_data:
            share = slice_.value / summary.total_spent * 100
            logger.info(f"  {slice_.name:<30} {share:5.1f}%  {slice_.color}")

    logger.info("\nRecent:")
    logger.info("-" * 80)
    if not tracker.expenses:
        logger.info("  No expenses yet — add your first ✨")
    for expense in tracker.expenses[: args.limit]:
        logger.info(
            f"  {expense.name:<30} {format_currency(expense.amount):>12}  "
            f"{category_label(tracker.categories, expense.category)} · "
            f"{pretty_date(expense.date)}"
        )


def cmd_rename(args, services):
    """Rename the trip."""
    services.tracker.set_trip_name(args.name)
    logger.info(f"✓ Trip renamed to '{args.name}'")


def cmd_budget(args, services):
    """Set the trip budget."""
    budget = services.tracker.set_budget(args.value)
    if not budget.is_finite():
        logger.warning(f"'{args.value}' is not a number; the budget is now unset.")
        return
    logger.info(f"✓ Budget set to {format_currency(budget)}")


def _confirm(question: str) -> bool:
    answer = input(f"\n{question} (yes/no): ").strip().lower()
    return answer == "yes"


def cmd_reset(args, services):
    """Reset trip, budget, categories and expenses to defaults."""
    if services.tracker.reset_all(_confirm):
        logger.info("✓ Trip reset to defaults.")
    else:
        logger.info("Reset cancelled.")


def setup_parser(subparsers):
    """Setup trip subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "trip",
        help="Show and edit the trip",
        description="Show the budget dashboard and edit trip name and budget",
    )

    trip_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available trip commands",
        dest="subcommand",
        required=True,
    )

    # trip show
    show_parser = trip_subparsers.add_parser("show", help="Show the budget dashboard")
    show_parser.add_argument(
        "--limit",
        type=int,
        default=10,
        help="Number of recent expenses to show (default: 10)",
    )
    show_parser.set_defaults(func=cmd_show)

    # trip rename
    rename_parser = trip_subparsers.add_parser("rename", help="Rename the trip")
    rename_parser.add_argument("name", help="New trip name")
    rename_parser.set_defaults(func=cmd_rename)

    # trip budget
    budget_parser = trip_subparsers.add_parser("budget", help="Set the total budget")
    budget_parser.add_argument("value", help="New budget, e.g. 1500")
    budget_parser.set_defaults(func=cmd_budget)

    # trip reset
    reset_parser = trip_subparsers.add_parser(
        "reset", help="Reset trip, budget, and all expenses"
    )
    reset_parser.set_defaults(func=cmd_reset)
