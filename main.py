#!/usr/bin/env python3
"""
Java Structure Grader
Main entry point for the command line tool.
"""

import argparse
import logging
import sys
from pathlib import Path

from comparator.report_builder import ReportBuilder
from core.comparison import compare_projects
from core.config import MatchingConfig
from core.errors import GraderError
from utils.file_utils import remove_directory, unzip_to_tempdir, validate_archive

logger = logging.getLogger(__name__)


def resolve_source(path: str, config: MatchingConfig, cleanup: list) -> Path:
    """Turn a zip file, directory or single .java file into something compare_projects can walk."""
    source = Path(path)
    if source.suffix.lower() == '.zip':
        validate_archive(source, config.max_upload_bytes)
        extracted = Path(unzip_to_tempdir(source))
        cleanup.append(extracted)
        return extracted
    if not source.exists():
        raise FileNotFoundError(f"No such file or directory: {source}")
    return source


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compare student Java code against a reference solution.")
    parser.add_argument('student', help="Student submission: zip, directory or .java file")
    parser.add_argument('reference', help="Reference solution: zip, directory or .java file")
    parser.add_argument('--threshold', type=float, default=None,
                        help="Similarity threshold for approximate matches (default 0.7)")
    parser.add_argument('--timeout', type=float, default=None, help="Give up after this many seconds")
    parser.add_argument('--json', dest='json_path', help="Write a JSON report to this path")
    parser.add_argument('--html', dest='html_path', help="Write an HTML report to this path")
    parser.add_argument('-v', '--verbose', action='store_true', help="Enable debug logging")
    return parser


def main(argv=None) -> int:
    """Main execution function."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    cleanup = []
    try:
        env_config = MatchingConfig.from_env()
        config = MatchingConfig(
            similarity_threshold=(args.threshold if args.threshold is not None
                                  else env_config.similarity_threshold),
            timeout_seconds=args.timeout if args.timeout is not None else env_config.timeout_seconds,
            max_concurrent_analyses=env_config.max_concurrent_analyses,
            max_upload_bytes=env_config.max_upload_bytes,
        )
        student = resolve_source(args.student, config, cleanup)
        reference = resolve_source(args.reference, config, cleanup)
        summary = compare_projects(student, reference, config)

        builder = ReportBuilder()
        metrics = builder.collect_metrics(summary)
        if args.json_path:
            builder.generate_json_report(args.json_path)
        if args.html_path:
            builder.generate_html_report(args.html_path)
    except (GraderError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        for directory in cleanup:
            remove_directory(directory)

    print("Java Structure Grader")
    print("=====================")
    print(f"Overall similarity: {metrics['overall_similarity']:.2%} ({metrics['prediction']})")
    print(f"Matched elements:   {metrics['matched_elements']}/{metrics['total_student_elements']} student, "
          f"{metrics['total_reference_elements']} reference")
    for kind, counts in metrics['per_kind'].items():
        print(f"  {kind:12} matched {counts['matched']:3}  missing {counts['missing']:3}  extra {counts['extra']:3}")
    for match in summary.matches:
        if match.differences:
            print(f"  ~ {match.reference_element.signature}: {', '.join(match.differences)}")
    for element in summary.unmatched_reference:
        print(f"  - missing {element.kind.value.lower()}: {element.signature}")
    for element in summary.unmatched_student:
        print(f"  + extra {element.kind.value.lower()}: {element.signature}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
