#!/usr/bin/env python3

from dateutil import parser as date_parser

from logger import get_logger
from models.expense import ExpenseDraft
from tools.formatting import (
    category_label,
    format_currency,
    pretty_date,
    to_input_date,
)

logger = get_logger()


def cmd_list(args, services):
    """List expenses, newest entry first."""
    tracker = services.tracker
    expenses = tracker.expenses

    if not expenses:
        logger.info("No expenses yet — add your first ✨")
        return

    logger.info("\nExpenses:")
    logger.info("=" * 80)
    for expense in expenses:
        logger.info(f"ID: {expense.id}")
        logger.info(f"  {expense.name}: {format_currency(expense.amount)}")
        logger.info(
            f"  {category_label(tracker.categories, expense.category)} · "
            f"{pretty_date(expense.date)}"
        )
        logger.info("-" * 80)

    logger.info(f"\nTotal expenses: {len(expenses)}")
    logger.info(f"Total spent: {format_currency(tracker.total_spent)}")


def cmd_add(args, services):
    """Log a new expense."""
    tracker = services.tracker
    draft = ExpenseDraft(
        name=args.name,
        amount=args.amount,
        category=args.category or tracker.draft.category,
        date=args.date or tracker.draft.date,
    )

    if tracker.find_category(draft.category) is None:
        logger.warning(
            f"Category '{draft.category}' does not exist; the expense will not "
            "appear in the category breakdown."
        )

    expense = tracker.add_expense(draft)
    if expense is None:
        logger.error("Expense not added: name is required and amount must be above 0.")
        return

    logger.info(f"✓ Added '{expense.name}' ({format_currency(expense.amount)}) with ID: {expense.id}")
    logger.info(f"  Remaining: {format_currency(tracker.remaining)}")


def cmd_remove(args, services):
    """Remove an expense by ID."""
    tracker = services.tracker
    expense = tracker.find_expense(args.expense_id)

    if not tracker.remove_expense(args.expense_id):
        logger.info(f"No expense with ID {args.expense_id}; nothing removed.")
        return

    logger.info(f"✓ Removed '{expense.name}' ({format_currency(expense.amount)})")


def _iso_date(value: str) -> str:
    """argparse type accepting any date dateutil understands."""
    try:
        return to_input_date(date_parser.parse(value).date())
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Invalid date: {value}") from e


def setup_parser(subparsers):
    """Setup expenses subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "expenses",
        help="Manage expenses",
        description="List, add and remove trip expenses",
    )

    expenses_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available expense commands",
        dest="subcommand",
        required=True,
    )

    # expenses list
    list_parser = expenses_subparsers.add_parser("list", help="List all expenses")
    list_parser.set_defaults(func=cmd_list)

    # expenses add
    add_parser = expenses_subparsers.add_parser("add", help="Add an expense")
    add_parser.add_argument("name", help="What was it? (e.g., 'Delta flight')")
    add_parser.add_argument("amount", help="Amount spent, e.g. 249.99")
    add_parser.add_argument(
        "--category",
        default=None,
        help="Category key (defaults to 'flights')",
    )
    add_parser.add_argument(
        "--date",
        type=_iso_date,
        default=None,
        help="Date of the expense (defaults to today)",
    )
    add_parser.set_defaults(func=cmd_add)

    # expenses remove
    remove_parser = expenses_subparsers.add_parser(
        "remove", help="Remove an expense by ID"
    )
    remove_parser.add_argument("expense_id", help="ID of the expense to remove")
    remove_parser.set_defaults(func=cmd_remove)
