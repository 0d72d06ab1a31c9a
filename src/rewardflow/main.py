"""Command line entry point."""
import sys
import argparse
from pathlib import Path
from typing import List, Optional

from rewardflow.config.settings import get_settings
from rewardflow.reports.generator import ReportGenerator
from rewardflow.rewards.aggregator import RewardAggregator, resolve_bound
from rewardflow.source.loader import TransactionLoader
from rewardflow.utils import (
    get_logger,
    configure_logging,
    set_range_context,
    ConfigError,
    SourceError,
    ValidationError
)

logger = get_logger()


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(description="RewardFlow loyalty reward report")
    parser.add_argument("--config", type=Path, help="Path to config.yaml")
    parser.add_argument("--file", type=Path, help="Transactions JSON file (overrides config)")
    parser.add_argument("--start", help="First included day, YYYY-MM-DD")
    parser.add_argument("--end", help="Last included day, YYYY-MM-DD")
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)"
    )
    parser.add_argument("--sort-by", help="Column to sort tables by, e.g. totalPoints")
    parser.add_argument("--order", choices=["asc", "desc"], default="asc")
    parser.add_argument("--search", help="Filter total rewards by name or points")
    parser.add_argument("--page", type=int, default=0, help="Zero-based page of each table")
    parser.add_argument(
        "--rows-per-page",
        type=int,
        help="Rows per table page (text default from config, 0 shows all)"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the RewardFlow report."""
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings(args.config)
    except ConfigError as e:
        logger.critical(f"Invalid configuration: {e}")
        return 1

    configure_logging(
        settings.log_level,
        log_dir=settings.logs_dir,
        max_file_size_mb=settings.log_max_file_size_mb,
        backup_count=settings.log_backup_count
    )

    try:
        start = resolve_bound(args.start, "start")
        end = resolve_bound(args.end, "end")
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    set_range_context(start, end)
    transactions_file = args.file or settings.transactions_file
    rows_per_page = args.rows_per_page
    if rows_per_page is None and args.format == "text":
        rows_per_page = settings.rows_per_page

    try:
        transactions = TransactionLoader(transactions_file).load()
    except SourceError as e:
        print(f"Error loading transactions: {e}", file=sys.stderr)
        return 1

    summary = RewardAggregator().aggregate(transactions, start, end)
    generator = ReportGenerator(
        date_format=settings.date_format,
        rows_per_page=rows_per_page or None
    )

    render = generator.render_json if args.format == "json" else generator.render_text
    try:
        output = render(
            transactions,
            summary,
            start,
            end,
            sort_by=args.sort_by,
            order=args.order,
            page=args.page,
            search=args.search
        )
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    finally:
        set_range_context(None, None)

    print(output.rstrip("\n"))
    return 0


if __name__ == "__main__":
    sys.exit(main())
