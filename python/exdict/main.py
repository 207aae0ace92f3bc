"""exdict CLI - look up identifiers in CSV/TSV dictionaries.

Usage:
    python -m exdict.main ORD001 "'ORD0012'"
    python -m exdict.main --config config.json --stats
    python -m exdict.main --source extra.tsv --line "SELECT ORD001 FROM x" --column 9
"""

import argparse
import logging
import sys
from pathlib import Path

from . import config as cfg
from .builder import DictionaryBuilder
from .hover import hover_text
from .resolver import Resolver, render
from .schema import SourceDescriptor, description_columns_from


def _parse_columns(text: str):
    """'2' -> 2, '2,3' -> [2, 3]."""
    parts = [int(p) for p in text.split(",") if p.strip()]
    return parts if len(parts) != 1 or "," in text else parts[0]


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="exdict - identifier lookup over CSV/TSV dictionaries"
    )
    parser.add_argument(
        "tokens",
        nargs="*",
        help="Tokens to look up",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        help="Path to config.json (default: discovered)",
    )
    parser.add_argument(
        "--source",
        "-s",
        type=Path,
        action="append",
        default=[],
        help="Extra CSV/TSV file, loaded after configured sources (repeatable)",
    )
    parser.add_argument(
        "--id-column",
        type=int,
        default=0,
        help="Key column for --source files (default: 0)",
    )
    parser.add_argument(
        "--value-column",
        type=int,
        default=1,
        help="Content column for --source files (default: 1)",
    )
    parser.add_argument(
        "--description-columns",
        type=_parse_columns,
        help="Description column(s) for --source files, e.g. 2 or 2,3",
    )
    parser.add_argument(
        "--encoding",
        type=str,
        help="Encoding for --source files (default: from config)",
    )
    parser.add_argument(
        "--no-header",
        action="store_true",
        help="--source files have no header row",
    )
    parser.add_argument(
        "--line",
        type=str,
        help="Line of text to hover over (use with --column)",
    )
    parser.add_argument(
        "--column",
        type=int,
        default=0,
        help="Zero-based column within --line (default: 0)",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print per-source load counts",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log load progress",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only log errors",
    )

    args = parser.parse_args(argv)

    config = cfg.load(args.config)
    verbose = args.verbose or cfg.get_default("verbose", False, config)
    quiet = args.quiet or cfg.get_default("quiet", False, config)
    level = logging.ERROR if quiet else logging.INFO if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(message)s")

    descriptors = cfg.load_sources(config, base_dir=cfg.config_dir(args.config))
    try:
        for path in args.source:
            descriptors.append(
                SourceDescriptor(
                    path=path,
                    id_column=args.id_column,
                    value_column=args.value_column,
                    description_columns=description_columns_from(args.description_columns),
                    encoding=args.encoding or cfg.get_default("encoding", "utf-8", config),
                    has_header=not args.no_header,
                )
            )
    except ValueError as e:
        parser.error(str(e))

    if not descriptors:
        print("No sources configured. Add \"sources\" to config.json or pass --source.",
              file=sys.stderr)
        return 1

    missing = cfg.check_paths(descriptors)
    for descriptor in missing:
        print(f"Source not found: {descriptor.path}", file=sys.stderr)

    builder = DictionaryBuilder()
    resolver = Resolver(builder.build(descriptors))

    if args.stats:
        print(f"Keys: {builder.stats.total_keys:,} "
              f"({builder.stats.overwritten:,} overwritten)")
        for result in builder.stats.results:
            print(f"  {result.source_path}: {result.total_registered:,} entries, "
                  f"{result.total_skipped:,} skipped [{result.encoding_used}]")

    if args.line is not None:
        text = hover_text(resolver, args.line, args.column)
        if text is not None:
            print(text)

    for token in args.tokens:
        result = resolver.resolve(token)
        if result is None:
            continue
        print("=" * 60)
        print(result.used_key)
        print("=" * 60)
        print(render(result))

    return 1 if missing else 0


if __name__ == "__main__":
    sys.exit(main())
