#!/usr/bin/env python3

import argparse
import io
import json
import logging
import sys
import time
from importlib.metadata import PackageNotFoundError, version
from typing import Dict, List

from wnsuggest.config import SuggesterConfig, load_config
from wnsuggest.document import load_document
from wnsuggest.enricher import EnrichmentStats
from wnsuggest.lexicon import NltkWordNet, load_lexicon
from wnsuggest.selector_parser import SELECTOR_GRAMMAR_VERSION
from wnsuggest.suggester import WordNetSuggester, __version__

# Ensure UTF-8 encoding for stdout
sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8")


def show_enrichment_statistics(progress_data: Dict, stats: EnrichmentStats):
    """Display detailed enrichment statistics."""
    total_time = time.time() - progress_data["start_time"]
    stages: List[Dict] = progress_data.get("stages", [])

    sys.stderr.write("=== Enrichment Statistics ===\n")
    sys.stderr.write(f"Total processing time: {total_time:.2f} seconds\n")
    if stats.skipped:
        sys.stderr.write("Document skipped: lexical backend unavailable\n")
    sys.stderr.write(f"Spans seen: {stats.spans_seen}\n")
    sys.stderr.write(f"  excluded: {stats.spans_excluded}\n")
    sys.stderr.write(f"  below shortest word: {stats.spans_gated}\n")
    sys.stderr.write(
        f"Lookups: {stats.lookups} ({stats.lookups_matched} matched, "
        f"{stats.lookups_failed} failed)\n"
    )
    match_rate = (stats.lookups_matched / stats.lookups * 100) if stats.lookups else 0
    sys.stderr.write(f"Match rate: {match_rate:.1f}%\n")
    sys.stderr.write(f"Senses accepted: {stats.senses_accepted}\n")
    sys.stderr.write(f"Annotations created: {stats.annotations_created}\n")
    sys.stderr.write(f"Features written: {stats.features_written}\n")

    if stages:
        sys.stderr.write("\nSpan type breakdown:\n")
        for i, stage_info in enumerate(stages):
            prev_time = stages[i - 1]["timestamp"] if i > 0 else 0
            sys.stderr.write(
                f"  {stage_info['stage']}: {stage_info['timestamp'] - prev_time:.2f}s\n"
            )

    sys.stderr.write("=============================\n\n")


def main():
    parser = argparse.ArgumentParser(
        description="Add WordNet relation features to an annotated JSON document."
    )
    parser.add_argument("document_file", nargs="?", help="Path to input document JSON")
    parser.add_argument(
        "--config", type=str, default=None, help="Path to suggester configuration JSON"
    )
    parser.add_argument(
        "--lexicon",
        type=str,
        default=None,
        help="Use an in-memory lexicon JSON file instead of NLTK WordNet",
    )
    parser.add_argument(
        "--pretty-print",
        action="store_true",
        help="Emit the document as indented JSON",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set logging level",
    )
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress all progress updates",
    )
    parser.add_argument(
        "--show-stats",
        action="store_true",
        help="Show detailed enrichment statistics",
    )
    parser.add_argument(
        "--show-timing",
        action="store_true",
        help="Show detailed timing information",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Write output to this file (UTF-8, LF line endings). If omitted, output goes to stdout.",
    )

    args = parser.parse_args()

    if args.version:
        try:
            nltk_version = version("nltk")
        except PackageNotFoundError:
            nltk_version = "not installed"
        print("Version information:")
        print(f"  nltk: {nltk_version}")
        print(f"  wnsuggest: {__version__}")
        print(f"  Selector grammar: {SELECTOR_GRAMMAR_VERSION}")
        sys.exit(0)

    if not args.document_file:
        parser.error("the following arguments are required: document_file")

    overall_start_time = time.time()

    logging.basicConfig(
        level=getattr(logging, args.log_level), format="[%(levelname)s] %(message)s"
    )
    logger = logging.getLogger("wnsuggest")

    load_start = time.time()
    try:
        config = load_config(args.config) if args.config else SuggesterConfig()
        document = load_document(args.document_file)
    except (OSError, ValueError) as e:
        logger.error("%s", e)
        sys.exit(2)
    if document.name is None:
        document.name = args.document_file
    load_time = time.time() - load_start

    if args.show_timing:
        sys.stderr.write(f"File loading time: {load_time:.3f}s\n")

    if args.lexicon:
        lexicon_path = args.lexicon
        logger.info("Using in-memory lexicon %s", lexicon_path)
        suggester = WordNetSuggester(config, lambda: load_lexicon(lexicon_path))
    else:
        suggester = WordNetSuggester(config, NltkWordNet)

    init_start = time.time()
    suggester.initialize()
    if args.show_timing:
        sys.stderr.write(f"Backend initialization time: {time.time() - init_start:.3f}s\n")

    start_time = time.time()
    progress_data = {"stages": [], "start_time": start_time}

    def progress_callback(stage: str, current: int, total: int):
        """Progress callback for WordNetSuggester."""
        if not args.quiet:
            pct = (current / total * 100) if total else 0
            sys.stderr.write(f"\rEnrichment: {stage}: {current}/{total} ({pct:.1f}%)")
            sys.stderr.flush()

        progress_data["stages"].append(
            {
                "stage": stage,
                "current": current,
                "total": total,
                "timestamp": time.time() - start_time,
            }
        )

    stats = suggester.process(document, progress_callback=progress_callback)
    if not args.quiet:
        sys.stderr.write("\n")

    if args.show_timing:
        sys.stderr.write(f"Enrichment time: {time.time() - start_time:.3f}s\n")

    if args.show_stats:
        show_enrichment_statistics(progress_data, stats)

    sys.stderr.write(
        f"Wrote {stats.features_written} features and created "
        f"{stats.annotations_created} annotations\n"
    )

    overall_time = time.time() - overall_start_time
    if args.show_timing:
        sys.stderr.write(f"Overall processing time: {overall_time:.3f} seconds\n")

    output_stream = None
    if args.output:
        output_stream = open(args.output, "w", encoding="utf-8", newline="\n")
    else:
        output_stream = sys.stdout

    try:
        json.dump(
            document.to_dict(),
            output_stream,
            indent=2 if args.pretty_print else None,
            ensure_ascii=False,
        )
        output_stream.write("\n")
    finally:
        if args.output and output_stream is not sys.stdout:
            output_stream.close()


if __name__ == "__main__":
    main()
