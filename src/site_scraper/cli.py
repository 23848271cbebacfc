"""Command-line interface for the site scraper."""

import argparse
import asyncio
import json
import sys
from dataclasses import replace
from typing import List, Optional

from site_scraper.config import ScraperConfig
from site_scraper.constants import MAX_PAGES_LIMIT
from site_scraper.errors import ScrapeError
from site_scraper.logging_config import setup_logging
from site_scraper.models import SiteResult
from site_scraper.service import scrape_site

EXIT_OK = 0
EXIT_CLIENT_ERROR = 1
EXIT_SERVER_ERROR = 2


def exit_code_for(error: ScrapeError) -> int:
    """Map a status hint onto a process exit code."""
    return EXIT_CLIENT_ERROR if 400 <= error.status_hint < 500 else EXIT_SERVER_ERROR


def print_site_summary(result: SiteResult) -> None:
    """Print a scraped site in a readable form.

    Args:
        result: SiteResult to print
    """
    print(f"\n{'=' * 60}")
    print(f"Site: {result.site_title}")
    print(f"Base URL: {result.base_url}")
    print(f"Scraped at: {result.scraped_at.isoformat()}")
    print(f"Pages: {result.total_pages}")
    print(f"{'=' * 60}")

    for page in result.pages:
        print(f"\n{page.url}  {page.title}")
        if page.meta_description:
            print(f"  {page.meta_description}")
        for heading in page.headings[:5]:
            print(f"  [{heading.level}] {heading.text}")
        print(
            f"  {len(page.content)} paragraphs, {len(page.images)} images, "
            f"{len(page.internal_links)} internal / {len(page.external_links)} external links"
        )

    print(f"\n{'=' * 60}\n")


def scrape_command(args: argparse.Namespace, config: ScraperConfig) -> int:
    """Run a scrape and write its result.

    Returns:
        Process exit code
    """
    try:
        result = asyncio.run(scrape_site(args.url, max_pages=args.max_pages, config=config))
    except ScrapeError as e:
        payload = {"success": False, "error": e.message, "kind": e.kind.value, "status": e.status_hint}
        print(json.dumps(payload, indent=2), file=sys.stderr if args.output == "text" else sys.stdout)
        return exit_code_for(e)

    if args.output == "json":
        output = json.dumps({"success": True, "data": result.to_dict()}, indent=2, ensure_ascii=False)
        if args.output_file:
            with open(args.output_file, "w", encoding="utf-8") as f:
                f.write(output)
            print(f"Result written to {args.output_file}", file=sys.stderr)
        else:
            print(output)
    else:
        print_site_summary(result)

    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    config = ScraperConfig.from_env()

    parser = argparse.ArgumentParser(
        description="Site Scraper - Crawl a website and extract structured page content"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=config.log_level.upper(),
        help="Set logging verbosity (default: INFO)",
    )
    parser.add_argument(
        "--log-file",
        default=config.log_file,
        help="Write logs to file in addition to console",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    scrape_parser = subparsers.add_parser("scrape", help="Scrape a website starting from a URL.")
    scrape_parser.add_argument("url", help="Seed URL (http or https)")
    scrape_parser.add_argument(
        "--max-pages",
        type=int,
        default=config.max_pages,
        help=f"Maximum pages to scrape, 1-{MAX_PAGES_LIMIT} (default: {config.max_pages})",
    )
    scrape_parser.add_argument(
        "--timeout",
        type=float,
        default=config.timeout,
        help=f"Per-page timeout in seconds (default: {config.timeout})",
    )
    scrape_parser.add_argument(
        "--headed",
        action="store_true",
        help="Show the browser window when the headless fallback is used",
    )
    scrape_parser.add_argument(
        "--output",
        "-o",
        choices=["text", "json"],
        default="json",
        help="Output format (default: json)",
    )
    scrape_parser.add_argument(
        "--output-file",
        "-f",
        help="Write output to file (only for json format)",
    )

    args = parser.parse_args(argv)

    setup_logging(level=args.log_level, log_file=args.log_file)

    if args.command != "scrape":
        parser.print_help()
        return EXIT_CLIENT_ERROR

    config = replace(
        config,
        timeout=args.timeout,
        headless=config.headless and not args.headed,
    )
    return scrape_command(args, config)


if __name__ == "__main__":
    sys.exit(main())
