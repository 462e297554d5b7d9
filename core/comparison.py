"""
Comparison Module
Runs the element matcher per kind and aggregates the results into a summary.
"""

import logging
import os
import threading
import time
from pathlib import Path
from typing import Dict, List, Optional, Union

from .code_element import CodeElement, ComparisonSummary, ElementKind, MatchResult
from .config import MatchingConfig
from .element_matcher import ElementMatcher, classify
from .errors import ComparisonCancelled
from .java_parser import parse_java_file
from utils.file_utils import list_java_files

logger = logging.getLogger(__name__)


def group_by_kind(elements: List[CodeElement]) -> Dict[ElementKind, List[CodeElement]]:
    grouped = {kind: [] for kind in ElementKind}
    for element in elements:
        grouped[element.kind].append(element)
    return grouped


def overall_similarity(matches: List[MatchResult], total_student: int, total_reference: int) -> float:
    """Mean match similarity scaled by coverage of the larger element set."""
    if not matches or total_student == 0:
        return 0.0
    average = sum(m.similarity for m in matches) / len(matches)
    coverage = len(matches) / max(total_student, total_reference)
    return average * coverage


class ComparisonAggregator:
    def __init__(self, config: Optional[MatchingConfig] = None):
        self.config = config or MatchingConfig()
        self.matcher = ElementMatcher(similarity_threshold=self.config.similarity_threshold)
        self.clock = time.monotonic

    def compare(self, student_elements: List[CodeElement], reference_elements: List[CodeElement],
                cancel_event: Optional[threading.Event] = None) -> ComparisonSummary:
        deadline = None
        if self.config.timeout_seconds is not None:
            deadline = self.clock() + self.config.timeout_seconds

        student_by_kind = group_by_kind(student_elements)
        reference_by_kind = group_by_kind(reference_elements)

        matches = []
        unmatched_student = []
        unmatched_reference = []
        for kind in ElementKind:
            self._check_cancelled(kind, cancel_event, deadline)
            kind_matches, rest_student, rest_reference = self.matcher.match(
                student_by_kind[kind], reference_by_kind[kind])
            logger.debug(f"{kind.value}: {len(kind_matches)} matches, {len(rest_student)} extra, "
                         f"{len(rest_reference)} missing")
            matches.extend(kind_matches)
            unmatched_student.extend(rest_student)
            unmatched_reference.extend(rest_reference)

        classify(matches, unmatched_student, unmatched_reference)

        total_student = len(student_elements)
        total_reference = len(reference_elements)
        summary = ComparisonSummary(
            matches=matches,
            unmatched_student=unmatched_student,
            unmatched_reference=unmatched_reference,
            overall_similarity=overall_similarity(matches, total_student, total_reference),
            total_student_elements=total_student,
            total_reference_elements=total_reference,
        )
        logger.info(f"Code comparison completed. Overall similarity: {summary.overall_similarity:.2%}, "
                    f"matched elements: {summary.matched_elements}/{total_student}")
        return summary

    def _check_cancelled(self, kind: ElementKind, cancel_event: Optional[threading.Event],
                         deadline: Optional[float]) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise ComparisonCancelled(f"Comparison cancelled before the {kind.value} pass")
        if deadline is not None and self.clock() > deadline:
            raise ComparisonCancelled(
                f"Comparison exceeded {self.config.timeout_seconds}s before the {kind.value} pass")


def compare(student_elements: List[CodeElement], reference_elements: List[CodeElement],
            config: Optional[MatchingConfig] = None,
            cancel_event: Optional[threading.Event] = None) -> ComparisonSummary:
    """Compare student elements against reference elements and classify every element."""
    return ComparisonAggregator(config).compare(student_elements, reference_elements, cancel_event)


def parse_java_files(paths: List[Union[str, Path]], root: Union[str, Path, None] = None) -> List[CodeElement]:
    elements = []
    for path in paths:
        file_name = os.path.relpath(path, Path(root).resolve()) if root and os.path.isdir(root) else os.path.basename(path)
        file_elements = parse_java_file(path, file_name=file_name)
        logger.debug(f"Parsed {len(file_elements)} elements from file: {file_name}")
        elements.extend(file_elements)
    return elements


def compare_projects(student_dir: Union[str, Path], reference_dir: Union[str, Path],
                     config: Optional[MatchingConfig] = None,
                     cancel_event: Optional[threading.Event] = None) -> ComparisonSummary:
    """Parse every Java file under both directories and compare the extracted elements."""
    logger.info(f"Starting project comparison: {student_dir} vs {reference_dir}")
    try:
        student_elements = parse_java_files(list_java_files(student_dir), student_dir)
        reference_elements = parse_java_files(list_java_files(reference_dir), reference_dir)
        return compare(student_elements, reference_elements, config, cancel_event)
    except ComparisonCancelled:
        logger.warning(f"Project comparison cancelled: {student_dir} vs {reference_dir}")
        raise
    except Exception as e:
        logger.error(f"Error during project comparison: {str(e)}", exc_info=True)
        raise
