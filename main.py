"""Expense tracker entry point: logging setup and store construction"""
import argparse
import logging
import logging.config
from pathlib import Path
from typing import Optional

import config
from services import expense_queries
from services.expenses_service import ExpenseStore
from utils.storage import JsonFileBackend

# --- Unified Logging Configuration with Rich ---
LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(name)s - %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "default": {
            "class": "rich.logging.RichHandler",
            "formatter": "default",
            "level": "DEBUG",
            "rich_tracebacks": True,
            "show_time": True,
            "show_path": False,
            "log_time_format": "%Y-%m-%d %H:%M:%S",
            "markup": False
        },
    },
    "loggers": {
        "": { # Root logger for the application
            "handlers": ["default"],
            "level": config.LOG_LEVEL,
            "propagate": False,
        },
    },
}

_logging_configured = False

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Applies LOGGING_CONFIG once per process."""
    global _logging_configured
    if _logging_configured:
        return
    logging.config.dictConfig(LOGGING_CONFIG)
    _logging_configured = True


def create_store(data_file: Optional[Path] = None) -> ExpenseStore:
    """Builds the store over the JSON file backend named in the environment."""
    path = Path(data_file) if data_file is not None else config.EXPENSES_DATA_FILE
    logger.info(f"Opening expense data file {path} (key '{config.EXPENSES_STORAGE_KEY}')")
    return ExpenseStore(JsonFileBackend(path), storage_key=config.EXPENSES_STORAGE_KEY)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Summarize stored expenses.")
    parser.add_argument("--data-file", type=Path, default=None, help="JSON file holding the expense store.")
    parser.add_argument("--days", type=int, default=30, help="Size of the recent-spending window.")
    parser.add_argument("--export", action="store_true", help="Write a dated CSV export.")
    args = parser.parse_args(argv)

    configure_logging()
    store = create_store(args.data_file)

    summary = store.summary()
    recent = expense_queries.summarize(store.last_n_days(args.days))
    category, amount = expense_queries.top_category(summary)
    logger.info(f"Total expenses: {expense_queries.format_currency(summary.total)} across {len(store.load_all())} records")
    logger.info(f"Last {args.days} days: {expense_queries.format_currency(recent.total)}")
    logger.info(f"Top category: {category.value} ({expense_queries.format_currency(amount)})")
    for cat, cat_amount, share in expense_queries.category_breakdown(summary):
        logger.info(f"  {cat.value:<14} {expense_queries.format_currency(cat_amount):>12} {share:6.1%}")
    if store.salary:
        logger.info(f"Remaining from salary: {expense_queries.format_currency(store.remaining_amount())}")

    if args.export:
        path = store.write_csv_export(config.EXPENSES_EXPORT_DIR)
        logger.info(f"CSV export written to {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
