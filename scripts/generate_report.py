#!/usr/bin/env python3
"""CLI script for generating financial statements and reports.

Usage:
    # Monthly statement for a brand (cached after the first run)
    python scripts/generate_report.py --statement <BRAND_UUID> --kind brand --year 2025 --month 2

    # Platform-wide monthly statement
    python scripts/generate_report.py --statement platform --kind platform --year 2025 --month 2

    # Campaign P&L over the campaign's lifetime, written as PDF
    python scripts/generate_report.py --pnl <CAMPAIGN_UUID> --brand <BRAND_UUID> --pdf pnl.pdf

    # Platform revenue report for Q1
    python scripts/generate_report.py --platform quarterly --year 2025 --period 1

    # Influencer earnings summary for a year (or one month with --month)
    python scripts/generate_report.py --earnings <INFLUENCER_UUID> --year 2025

    # Statement views
    python scripts/generate_report.py --view balance_sheet --statement <UUID> --kind influencer --year 2025

    # Verbose logging
    python scripts/generate_report.py --platform monthly --year 2025 --period 3 --verbose
"""

import argparse
import json
import logging
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional
from uuid import UUID

# Add project root to path
sys.path.insert(0, str(__file__).rsplit("/", 2)[0])

from app.core.config import settings
from app.db.engine import get_db_session
from app.algos.reporting.services import (
    REPORT_TYPES,
    ReportingError,
    ReportingPolicy,
    ReportKind,
    generate_report_pdf,
)
from app.algos.reporting.workflows import StatementGenerator, PLATFORM_SUBJECT_ID

VIEW_KINDS = ("income_statement", "balance_sheet", "cash_flow", "financial_analysis")


# ANSI color codes
class Colors:
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


def print_header(text: str) -> None:
    print(f"\n{Colors.BOLD}{Colors.BLUE}{'=' * 60}{Colors.RESET}")
    print(f"{Colors.BOLD}{Colors.BLUE}{text}{Colors.RESET}")
    print(f"{Colors.BOLD}{Colors.BLUE}{'=' * 60}{Colors.RESET}\n")


def print_success(text: str) -> None:
    print(f"{Colors.GREEN}✓ {text}{Colors.RESET}")


def print_error(text: str) -> None:
    print(f"{Colors.RED}✗ {text}{Colors.RESET}")


def print_info(text: str) -> None:
    print(f"{Colors.CYAN}ℹ {text}{Colors.RESET}")


def setup_logging(verbose: bool) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Generate financial statements and reports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    # What to generate
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument(
        "--statement",
        type=str,
        metavar="SUBJECT_ID",
        help="Monthly statement for a subject UUID ('platform' for the platform)",
    )
    target.add_argument(
        "--pnl",
        type=str,
        metavar="CAMPAIGN_ID",
        help="Campaign profit and loss report",
    )
    target.add_argument(
        "--platform",
        choices=REPORT_TYPES,
        help="Platform revenue report granularity",
    )
    target.add_argument(
        "--earnings",
        type=str,
        metavar="INFLUENCER_ID",
        help="Influencer earnings summary",
    )

    # Options
    parser.add_argument(
        "--kind",
        choices=["brand", "influencer", "platform"],
        default="brand",
        help="Subject kind for --statement (default: brand)",
    )
    parser.add_argument(
        "--view",
        choices=VIEW_KINDS,
        help="Render a statement view instead of the raw statement (with --statement)",
    )
    parser.add_argument(
        "--brand",
        type=str,
        metavar="BRAND_ID",
        help="Brand UUID stored on a P&L report (defaults to the campaign's brand)",
    )
    parser.add_argument(
        "--report-period",
        choices=["campaign_total", "monthly", "quarterly"],
        default="campaign_total",
        help="P&L window (default: campaign_total)",
    )
    parser.add_argument(
        "--year",
        type=int,
        default=date.today().year,
        help="Calendar year (default: current year)",
    )
    parser.add_argument(
        "--month",
        type=int,
        help="Month 1-12 (required for --statement unless --view is given)",
    )
    parser.add_argument(
        "--period",
        type=int,
        default=1,
        help="Day, week, month or quarter number for --platform (default: 1)",
    )

    # Output
    parser.add_argument(
        "--pdf",
        type=Path,
        metavar="PATH",
        help="Write the report as PDF to PATH",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser.parse_args()


def _to_jsonable(report: Any) -> Any:
    if hasattr(report, "to_dict"):
        return report.to_dict()
    if hasattr(report, "model_dump"):
        return report.model_dump()
    return report


def _subject_id(raw: str) -> Optional[UUID]:
    return PLATFORM_SUBJECT_ID if raw == "platform" else UUID(raw)


def generate(args: argparse.Namespace, generator: StatementGenerator) -> tuple:
    """Run the requested generation; returns (report kind, report)."""
    if args.statement:
        subject_id = _subject_id(args.statement)
        if args.view:
            builders = {
                "income_statement": generator.generate_income_statement,
                "balance_sheet": generator.generate_balance_sheet,
                "cash_flow": generator.generate_cash_flow_statement,
                "financial_analysis": generator.generate_financial_analysis,
            }
            return ReportKind(args.view), builders[args.view](subject_id, args.kind, args.year, args.month)
        if not args.month:
            raise ValueError("--month is required for a monthly statement")
        return ReportKind.STATEMENT, generator.generate_monthly_statement(
            subject_id, args.kind, args.year, args.month
        )

    if args.pnl:
        brand_id = UUID(args.brand) if args.brand else None
        return ReportKind.PNL, generator.generate_campaign_pl_report(
            UUID(args.pnl), brand_id, args.report_period
        )

    if args.platform:
        return ReportKind.PLATFORM, generator.generate_platform_revenue_report(
            args.platform, args.year, args.period
        )

    return ReportKind.EARNINGS, generator.generate_influencer_earnings_summary(
        UUID(args.earnings), args.year, args.month
    )


def main() -> int:
    """Main entry point."""
    args = parse_args()
    setup_logging(args.verbose)

    print_header("Financial Report Generation")
    print_info(f"Started at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")

    try:
        with get_db_session() as session:
            generator = StatementGenerator(session, policy=ReportingPolicy.from_settings(settings))
            kind, report = generate(args, generator)

            print_header(f"{kind.label} Result")
            print(json.dumps(_to_jsonable(report), indent=2, default=str))

            if args.pdf:
                pdf_bytes = generate_report_pdf(kind, report, platform_name=settings.PLATFORM_NAME)
                args.pdf.write_bytes(pdf_bytes)
                print_success(f"PDF written to {args.pdf} ({len(pdf_bytes)} bytes)")

        print_success(f"Completed at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
        return 0

    except (ReportingError, ValueError) as e:
        print_error(str(e))
        return 2
    except KeyboardInterrupt:
        print_error("Interrupted by user")
        return 130
    except Exception as e:
        print_error(f"Fatal error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
