#!/usr/bin/env python3
"""
Main CLI entry point with argument parser and command dispatch.
"""

from __future__ import annotations

import argparse

from markstats.helpers.logging_helper import configure_logging
from markstats.interfaces.cli.commands.render_cli import cmd_render
from markstats.interfaces.cli.commands.summary_cli import cmd_summary
from markstats.services.config_svc import ConfigService


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    p = argparse.ArgumentParser(
        prog="markstats",
        description="markstats - mark count statistics for a GraphQL media catalog",
        epilog="Examples:\n"
        "  markstats summary --limit 20                   # Print top 20 tags and totals per year\n"
        "  markstats --url http://stash:9999/graphql render --out stats.html",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("--url", help="GraphQL endpoint (overrides graphql_url)")
    p.add_argument("--log-level", help="logging level (overrides log_level)")

    sub = p.add_subparsers(
        dest="cmd",
        title="commands",
        description="Available commands (use 'markstats <command> --help' for command-specific help)",
    )

    # summary: print aggregations
    s = sub.add_parser("summary", help="Print mark count by tag and by year")
    s.add_argument("--limit", type=int, help="number of tags to show (default: tag_chart_limit)")
    s.set_defaults(func=cmd_summary)

    # render: write the stats page
    s = sub.add_parser("render", help="Render the stats page to an HTML file")
    s.add_argument("--out", default="markstats.html", help="output file (default: markstats.html)")
    s.set_defaults(func=cmd_render)

    return p


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # If no command provided, show help
    if args.cmd is None:
        parser.print_help()
        return 0

    overrides: dict[str, object] = {}
    if args.url:
        overrides["graphql_url"] = args.url
    if args.log_level:
        overrides["log_level"] = args.log_level
    if args.cmd == "render":
        # No navbar on a standalone page
        overrides["stats_button"] = {"enabled": False}
    config = ConfigService(overrides=overrides)
    configure_logging(config.get("log_level", "INFO"))

    return args.func(args, config)


if __name__ == "__main__":
    raise SystemExit(main())
