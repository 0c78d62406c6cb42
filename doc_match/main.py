#!/usr/bin/env python3
# Path: doc_match/main.py
"""
doc_match - Main Entry Point

Batch front end for the matching engine. Reads references and paths
from text files (one entry per line) and runs the requested
operations against a fresh session.

Data Flow:
    INPUT:   reference list, path list, optional learning-data snapshot
    PROCESS: series detection, auto-matching, searches
    OUTPUT:  console summary, optional learning-data export

Usage:
    python -m doc_match.main --references refs.txt --paths paths.txt --detect-series
    python -m doc_match.main --references refs.txt --paths paths.txt --auto-match 0.8 --apply
    python -m doc_match.main --references refs.txt --paths paths.txt --search "Exhibit A5-02"
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from doc_match.config_loader import ConfigLoader
from doc_match.constants import (
    STATUS_OK, STATUS_FAIL, STATUS_WARN,
    MENU_HEADER, MENU_SEPARATOR,
)
from doc_match.core.logger import setup_ipo_logging, get_input_logger
from doc_match.loaders.learning_snapshot import LearningSnapshotParser
from doc_match.output.learning_export import LearningExporter
from doc_match.process.matcher import MatchingCoordinator, MatchingSession
from doc_match.process.matcher.models.errors import MatchingError


def print_banner() -> None:
    """Print application banner."""
    print()
    print(MENU_HEADER)
    print("  DOC_MATCH - Document Reference Matching")
    print(MENU_HEADER)
    print()


def read_lines(path: Path) -> list[str]:
    """
    Read one entry per line, skipping blank lines.

    Args:
        path: Text file

    Returns:
        Stripped, non-empty lines in file order
    """
    with open(path, 'r', encoding='utf-8') as f:
        return [line.strip() for line in f if line.strip()]


def initialize_system() -> ConfigLoader:
    """
    Load configuration and set up logging.

    Returns:
        ConfigLoader instance
    """
    config = ConfigLoader()
    setup_ipo_logging(
        log_dir=config.get('log_dir'),
        log_level=config.get('log_level', 'INFO'),
        console_output=config.get('log_console', True),
    )
    return config


def import_learning(session: MatchingSession, path: Path) -> None:
    """Apply a learning-data file to the session."""
    snapshot, report = LearningSnapshotParser().load_file(path)
    session.learning_store.apply_snapshot(snapshot)

    print(
        f"{STATUS_OK} Learning data: {report.patterns_imported} patterns, "
        f"{report.terms_imported} terms, {report.history_imported} history entries"
    )
    for issue in report.warnings:
        print(f"  {STATUS_WARN} {issue}")


def run_series(
    coordinator: MatchingCoordinator,
    session: MatchingSession,
    apply: bool
) -> None:
    """Detect series, print suggestions and optionally apply them."""
    suggestion_sets = coordinator.suggest_series(session)

    print(f"\n{STATUS_OK} Detected {len(suggestion_sets)} series")
    print(f"  {MENU_SEPARATOR}")
    for suggestion_set in suggestion_sets:
        group = suggestion_set.group
        template = suggestion_set.template
        print(
            f"  {group.series_key:<20} {group.size:>3} items  "
            f"{group.increment_pattern.value:<10} "
            f"{template.template if template else '(no template)'}"
        )
        for suggestion in suggestion_set.suggestions:
            marker = STATUS_OK if suggestion.exists and suggestion.available else STATUS_WARN
            print(f"      {marker} {suggestion.reference} -> {suggestion.path}")

    if apply:
        result = coordinator.apply_series(session, suggestion_sets)
        print(
            f"\n{STATUS_OK} Applied {len(result.applied)} series matches, "
            f"skipped {len(result.skipped)}"
        )


def run_auto_match(
    coordinator: MatchingCoordinator,
    session: MatchingSession,
    threshold: float,
    apply: bool
) -> None:
    """Propose auto-matches, print them and optionally apply them."""
    result = coordinator.auto_match(session, threshold)

    print(
        f"\n{STATUS_OK} {len(result.proposals)} proposals at threshold {threshold} "
        f"(high {result.high_confidence}, medium {result.medium_confidence}, "
        f"low {result.low_confidence})"
    )
    print(f"  {MENU_SEPARATOR}")
    for proposal in result.proposals:
        print(
            f"  {proposal.score:.3f} {proposal.confidence.value:<7} "
            f"{proposal.reference} -> {proposal.path}"
        )
    if result.unmatched:
        print(f"  {STATUS_WARN} {len(result.unmatched)} references without a proposal")

    if apply:
        applied = coordinator.apply_auto_matches(session, result)
        print(
            f"\n{STATUS_OK} Applied {len(applied.applied)} auto-matches, "
            f"skipped {len(applied.skipped)}"
        )


def run_search(
    coordinator: MatchingCoordinator,
    session: MatchingSession,
    text: str
) -> None:
    """Print ranked candidates for one reference."""
    response = coordinator.search(session, text)

    print(f"\n{STATUS_OK} {len(response)} results for '{text}'")
    print(f"  {MENU_SEPARATOR}")
    for rank, candidate in enumerate(response.results, 1):
        learned = ' (learned)' if candidate.is_learned else ''
        print(
            f"  {rank:>3}  {candidate.score:.3f}  {candidate.confidence.value:<7} "
            f"{candidate.path}{learned}"
        )
    for suggestion in response.suggestions:
        print(f"  {STATUS_WARN} Learned pattern: {suggestion.pattern} ({suggestion.usage})")


def print_summary(session: MatchingSession) -> None:
    """Print ledger counts."""
    summary = session.ledger.summary()
    print()
    print(MENU_HEADER)
    print(
        f"  Matched {summary['matched']}/{summary['references']} references, "
        f"{summary['available_paths']}/{summary['paths']} paths available"
    )
    print(MENU_HEADER)


def build_parser() -> argparse.ArgumentParser:
    """Command line definition."""
    parser = argparse.ArgumentParser(
        description='doc_match - Document Reference Matching',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m doc_match.main --references refs.txt --paths paths.txt --detect-series
  python -m doc_match.main --references refs.txt --paths paths.txt --auto-match 0.8 --apply
  python -m doc_match.main --references refs.txt --paths paths.txt --search "Exhibit A5-02"
        """
    )

    parser.add_argument(
        '--references', '-r',
        type=Path,
        required=True,
        help='Text file with one reference per line'
    )

    parser.add_argument(
        '--paths', '-p',
        type=Path,
        required=True,
        help='Text file with one candidate path per line'
    )

    parser.add_argument(
        '--learning-data', '-l',
        type=Path,
        help='Learning-data snapshot to import before matching'
    )

    parser.add_argument(
        '--detect-series',
        action='store_true',
        help='Detect numbered series and print generated paths'
    )

    parser.add_argument(
        '--auto-match',
        type=float,
        metavar='THRESHOLD',
        help='Propose the best candidate per reference at or above THRESHOLD'
    )

    parser.add_argument(
        '--apply',
        action='store_true',
        help='Confirm series/auto-match suggestions'
    )

    parser.add_argument(
        '--search', '-s',
        type=str,
        action='append',
        metavar='TEXT',
        help='Search for a reference (repeatable)'
    )

    parser.add_argument(
        '--export-learning', '-e',
        type=Path,
        metavar='FILE',
        help='Write learning data to FILE after matching'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress banner'
    )

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for doc_match.

    Returns:
        Exit code (0 for success, 1 for configuration or data errors)
    """
    args = build_parser().parse_args(argv)

    if not args.quiet:
        print_banner()

    coordinator: Optional[MatchingCoordinator] = None
    try:
        config = initialize_system()
        logger = get_input_logger('main')

        references = read_lines(args.references)
        paths = read_lines(args.paths)
        logger.info(f"Loaded {len(references)} references and {len(paths)} paths")

        coordinator = MatchingCoordinator(config)
        session = coordinator.create_session(references, paths)

        learning_data = args.learning_data or config.get('learning_data_path')
        if learning_data is not None:
            import_learning(session, Path(learning_data))

        if args.detect_series:
            run_series(coordinator, session, args.apply)

        if args.auto_match is not None:
            run_auto_match(coordinator, session, args.auto_match, args.apply)

        for text in args.search or []:
            run_search(coordinator, session, text)

        if args.export_learning:
            LearningExporter(config=config).write(session.learning_store, args.export_learning)
            print(f"\n{STATUS_OK} Learning data written to {args.export_learning}")

        print_summary(session)
        return 0

    except (MatchingError, OSError, ValueError) as e:
        print(f"\n{STATUS_FAIL} Error: {e}")
        return 1

    except KeyboardInterrupt:
        print("\n[Interrupted]")
        return 130

    finally:
        if coordinator is not None:
            coordinator.shutdown()


if __name__ == '__main__':
    sys.exit(main())
