#!/usr/bin/env python3
"""
Stem words from the command line.

Usage:
    python scripts/stem_terms.py running calories happiness
    echo "running calories" | python scripts/stem_terms.py
    python scripts/stem_terms.py --report
    python scripts/stem_terms.py --lexicon-dir /srv/lexicon aided

Output:
    One ``term<TAB>stem`` line per input word, or with ``--report`` the
    lexicon build summary followed by every rejected duplicate key.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import TextIO

from kstem.core.exceptions import KStemError
from kstem.core.logging import configure_logging
from kstem.lexicon.dictionary import BuildReport, build_dictionary
from kstem.lexicon.sources import load_lexicon_sources
from kstem.nlp.stemmer import KStemmer


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Stem English words against the KStem lexicon.",
    )
    parser.add_argument(
        "terms",
        nargs="*",
        help="Words to stem. Read from stdin when omitted.",
    )
    parser.add_argument(
        "--lexicon-dir",
        type=Path,
        default=None,
        help="Lexicon data directory (default: bundled lexicon)",
    )
    parser.add_argument(
        "--report",
        action="store_true",
        help="Print the lexicon build report instead of stemming",
    )
    return parser.parse_args(argv)


def read_terms(stream: TextIO) -> list[str]:
    """Split a text stream into whitespace-separated words."""
    return [word for line in stream for word in line.split()]


def format_stems(stemmer: KStemmer, terms: Iterable[str]) -> list[str]:
    return [f"{term}\t{stemmer.stem(term)}" for term in terms]


def format_report(report: BuildReport, entry_total: int) -> list[str]:
    """Render a BuildReport as printable lines."""
    lines = [
        f"entries: {entry_total}",
        f"collisions: {report.collision_count}",
    ]
    for source, count in report.source_counts.items():
        lines.append(f"  {source}: {count}")
    for collision in report.collisions:
        lines.append(
            f"collision: {collision.word} ({collision.source}, "
            f"kept {collision.existing_source})"
        )
    return lines


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point. Returns the process exit code."""
    args = parse_args(argv)
    # stdout carries results only
    configure_logging(log_level="WARNING")

    try:
        dictionary, report = build_dictionary(load_lexicon_sources(args.lexicon_dir))
    except KStemError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if args.report:
        lines = format_report(report, len(dictionary))
    else:
        terms = args.terms or read_terms(sys.stdin)
        lines = format_stems(KStemmer(dictionary, cache_size=0), terms)

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
