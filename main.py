"""CLI entry point for the candidate hunter."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import httpx

from src.core.airtable import AirtableSink
from src.core.config import Settings
from src.core.schemas import HuntReport
from src.pipeline.orchestrator import export_results_json, run_hunt
from src.profile.llm import available_providers
from src.reporting import render_candidates, render_log


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Candidate hunter - source developers for a job description",
    )
    subparsers = parser.add_subparsers(dest="command")

    # --- hunt subcommand (default) ---
    hunt_parser = subparsers.add_parser("hunt", help="Search, score and save candidates")
    hunt_parser.add_argument(
        "description",
        nargs="?",
        default="",
        help="Job description text (include 'MOCK' to use canned candidates)",
    )
    hunt_parser.add_argument("--file", help="Read the job description from a file")
    hunt_parser.add_argument(
        "--config",
        default=None,
        help="Path to settings YAML file (default: built-in settings)",
    )
    hunt_parser.add_argument("--limit", type=int, help="Max candidates to search (1-30)")
    hunt_parser.add_argument("--location", help="Location hint (default from settings)")
    hunt_parser.add_argument("--top", type=int, help="Number of top candidates to keep")
    hunt_parser.add_argument(
        "--strategy",
        choices=["heuristic", "llm"],
        help="Scoring strategy (default from settings)",
    )
    hunt_parser.add_argument(
        "--analyzer",
        choices=["llm", "heuristic"],
        help="Job description analyzer (default from settings)",
    )
    hunt_parser.add_argument(
        "--provider",
        choices=available_providers(),
        help="LLM provider for analysis and LLM scoring",
    )
    hunt_parser.add_argument(
        "--no-save",
        action="store_true",
        help="Skip writing the shortlist to Airtable",
    )
    hunt_parser.add_argument(
        "--export",
        choices=["json"],
        help="Export results to format (json)",
    )
    hunt_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    argv = list(sys.argv[1:] if argv is None else argv)

    # Default to hunt when no subcommand given
    if not argv or argv[0] not in ("hunt", "-h", "--help"):
        argv = ["hunt", *argv]

    return parser.parse_args(argv)


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def load_settings(args: argparse.Namespace) -> Settings:
    """Load settings and apply command-line overrides."""
    settings = Settings.from_yaml(args.config) if args.config else Settings()

    if args.strategy:
        settings.scoring.strategy = args.strategy
    if args.analyzer:
        settings.analyzer.mode = args.analyzer
    if args.provider:
        settings.scoring.llm_provider = args.provider
        settings.analyzer.provider = args.provider
    return settings


def read_description(args: argparse.Namespace) -> str:
    if args.file:
        path = Path(args.file)
        if not path.exists():
            msg = f"Job description file not found: {path}"
            raise FileNotFoundError(msg)
        return path.read_text()
    if not args.description.strip():
        msg = "a job description is required (argument or --file)"
        raise ValueError(msg)
    return args.description


async def run(args: argparse.Namespace, settings: Settings, description: str) -> HuntReport:
    """Run one hunt with a shared HTTP client."""
    async with httpx.AsyncClient(timeout=settings.http.timeout_s) as client:
        sink = None
        if settings.airtable.enabled and not args.no_save:
            sink = AirtableSink.from_config(client, settings.airtable)
        return await run_hunt(
            description,
            settings,
            client=client,
            sink=sink,
            location=args.location,
            limit=args.limit,
            top_count=args.top,
        )


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = load_settings(args)
        description = read_description(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        report = asyncio.run(run(args, settings, description))
    except (ImportError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print()
    print(render_candidates(report))
    print()
    print(render_log(report.debug, report.persistence, report.analyzer_error))

    if args.export == "json":
        print(f"\n{export_results_json(report)}")


if __name__ == "__main__":
    main()
