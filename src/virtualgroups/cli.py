#!/usr/bin/env python3
"""
virtualgroups CLI — group and sort the records of a JSON or CSV file.
Runs the same engine as the Qt model, printing the groups to the console.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import json
import logging
import os
import sys
import time
from pathlib import Path
from typing import Any, Dict, List, NoReturn, Optional

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

from virtualgroups.core.columns import Column
from virtualgroups.core.models import Group, GroupingParams
from virtualgroups.commands import GroupingCommand
from virtualgroups.services.record_loader import RecordLoader
from virtualgroups.aliases import (
    ORDER_ALIASES, ORDER_CHOICES, ORDER_HELP_TEXT,
    TEXT_COMPARE_ALIASES, TEXT_COMPARE_CHOICES, TEXT_COMPARE_HELP_TEXT,
    FORMAT_CHOICES, EPILOG_TEXT
)


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        for stream in (sys.stdout, sys.stderr):
            if hasattr(stream, "reconfigure"):
                stream.reconfigure(encoding='utf-8')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            description="virtualgroups — group and sort records from a JSON or CSV file",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        # Required arguments
        parser.add_argument(
            "--input", "-i",
            required=True,
            type=str,
            help="Input file (JSON array of objects, or CSV with a header row)"
        )
        parser.add_argument(
            "--group-by", "-g",
            required=True,
            type=str,
            dest="group_by",
            help="Field to group by (dotted paths allowed, e.g. address.city)"
        )

        parser.add_argument(
            "--format",
            choices=FORMAT_CHOICES,
            default=None,
            type=str,
            help="Input format. Default: detected from the file extension"
        )

        # Ordering options
        parser.add_argument(
            "--group-order",
            choices=ORDER_CHOICES,
            default="asc",
            type=str,
            help="Order of the groups. " + ORDER_HELP_TEXT
        )
        parser.add_argument(
            "--sort-by", "-s",
            default=None,
            type=str,
            dest="sort_by",
            help="Field to sort the items of each group by"
        )
        parser.add_argument(
            "--sort-order",
            choices=ORDER_CHOICES,
            default="asc",
            type=str,
            help="Order of --sort-by. Default: asc"
        )
        parser.add_argument(
            "--then-by", "-t",
            default=None,
            type=str,
            dest="then_by",
            help="Field that breaks ties of --sort-by"
        )
        parser.add_argument(
            "--then-order",
            choices=ORDER_CHOICES,
            default="asc",
            type=str,
            help="Order of --then-by. Default: asc"
        )
        parser.add_argument(
            "--text-compare",
            choices=TEXT_COMPARE_CHOICES,
            default="casefold",
            type=str,
            help=TEXT_COMPARE_HELP_TEXT
        )

        # Titles
        parser.add_argument(
            "--title-format",
            default=None,
            type=str,
            help="Group title template: {0} = title, {1} = number of items"
        )
        parser.add_argument(
            "--title-singular-format",
            default=None,
            type=str,
            help="Group title template for groups with a single item"
        )
        parser.add_argument(
            "--show-counts",
            action="store_true",
            help="Show the number of items in every group title"
        )
        parser.add_argument(
            "--initial-letter",
            action="store_true",
            help="Group text values by their first letter"
        )

        # Output options
        parser.add_argument(
            "--display",
            nargs="+",
            default=[],
            type=str,
            metavar='',
            help="Fields (space separated) to print for every item. Default: all fields"
        )
        parser.add_argument(
            "--json",
            action="store_true",
            help="Print the groups as JSON"
        )
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show detailed statistics, progress and debug logging"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        input_path = Path(args.input)
        if not input_path.exists():
            self.error_exit(f"File not found: {args.input}")
        if not input_path.is_file():
            self.error_exit(f"Path is not a file: {args.input}")

        if args.format is None:
            try:
                RecordLoader.detect_format(args.input)
            except ValueError as e:
                self.error_exit(str(e))

        if args.then_by and not args.sort_by:
            self.warning("--then-by has no effect without --sort-by")
        if args.title_singular_format and not (args.title_format or args.show_counts):
            self.warning("--title-singular-format has no effect without --title-format or --show-counts")
        if args.title_format and args.show_counts:
            self.warning("--title-format overrides --show-counts")

    def create_params(self, args: argparse.Namespace) -> GroupingParams:
        """Create GroupingParams from CLI arguments."""
        try:
            params = GroupingParams.from_field_names(
                group_by=args.group_by,
                sort_by=args.sort_by,
                then_by=args.then_by,
                group_order=ORDER_ALIASES[args.group_order],
                sort_order=ORDER_ALIASES[args.sort_order],
                then_order=ORDER_ALIASES[args.then_order],
                show_counts=args.show_counts,
                use_initial_letter=args.initial_letter,
                text_comparer=TEXT_COMPARE_ALIASES[args.text_compare],
                ignore_missing=True,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

        if args.title_format:
            params.title_format = args.title_format
            params.title_singular_format = args.title_singular_format
        elif args.title_singular_format:
            params.title_singular_format = args.title_singular_format
        return params

    def load_records(self, args: argparse.Namespace) -> List[Dict[str, Any]]:
        """Read the input file."""
        try:
            return RecordLoader.load(args.input, args.format)
        except (OSError, ValueError) as e:
            self.error_exit(f"Cannot read {args.input}: {e}")

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(
                f"\r  [{stage}] {current}/{total} ({percent:.1f}%)"
            )
            sys.stderr.flush()
        else:
            sys.stderr.write(f"\r  [{stage}] {current} items processed...")
            sys.stderr.flush()

    def run_grouping(self, records: List[Dict[str, Any]], params: GroupingParams) -> List[Group]:
        """Execute grouping workflow."""
        command = GroupingCommand()
        if self.verbose:
            print(f"Grouping {len(records)} records by '{params.group_by_column.name}'...")

        try:
            groups, stats = command.execute(
                records,
                params,
                progress_callback=self.progress_callback if self.verbose else None
            )

            if self.verbose:
                sys.stderr.write("\n")
                print()
                print(stats.print_summary())

            return groups
        except Exception as e:
            self.error_exit(f"Grouping failed: {e}")

    @staticmethod
    def display_columns(records: List[Dict[str, Any]], fields: List[str]) -> List[Column]:
        """Columns printed for every item: the requested fields, or every field of the first record."""
        if not fields and records:
            fields = list(records[0].keys())
        return [Column(field, aspect_name=field, ignore_missing_aspects=True) for field in fields]

    def output_results(self, groups: List[Group], records: List[Dict[str, Any]], fields: List[str]) -> None:
        """Output groups as plain text, in the order the engine built them."""
        if self.quiet:
            return

        if not groups:
            print("No records found.")
            return

        total_items = sum(g.count for g in groups)
        print(f"\nFound {len(groups)} groups ({total_items} items)")

        columns = self.display_columns(records, fields)
        for group in groups:
            print(f"\n📁 {group.label}")
            for index in group.members:
                record = records[index]
                print("   " + " | ".join(column.get_string_value(record) for column in columns))

    @staticmethod
    def output_json(groups: List[Group], records: List[Dict[str, Any]]) -> None:
        """Output groups as a JSON array: title, key, count, item indices and records."""
        output = [
            {
                "title": group.label,
                "key": group.key,
                "count": group.count,
                "items": list(group.members),
                "records": [records[index] for index in group.members],
            }
            for group in groups
        ]
        print(json.dumps(output, indent=2, ensure_ascii=False, default=str))

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv: Optional[List[str]] = None) -> None:
        """Main entry point with conditional output behavior."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet

        if self.verbose:
            logging.getLogger().setLevel(logging.DEBUG)

        self.validate_args(args)
        params = self.create_params(args)
        records = self.load_records(args)

        groups = self.run_grouping(records, params)

        if args.json:
            self.output_json(groups, records)
        else:
            self.output_results(groups, records, args.display)

        # Show completion time
        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\n✅ Completed in {elapsed:.2f} seconds")


def main(argv: Optional[List[str]] = None) -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run(argv)
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)")
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
