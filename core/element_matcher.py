"""
Element Matcher Module
Pairs student elements with reference elements of the same kind.

Matching runs in two greedy passes: exact name+signature matches first,
then the best-scoring reference element at or above the similarity
threshold. Both passes are order dependent (first found wins, ties go
to the first reference element seen).
"""

import logging
from typing import List, Optional, Tuple

from .code_element import CodeElement, MatchResult, MatchType
from .config import DEFAULT_SIMILARITY_THRESHOLD
from .difference_explainer import DifferenceExplainer
from .element_scorer import ElementSimilarityScorer
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

MatchOutput = Tuple[List[MatchResult], List[CodeElement], List[CodeElement]]


class ElementMatcher:
    def __init__(self, similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
                 scorer: Optional[ElementSimilarityScorer] = None,
                 explainer: Optional[DifferenceExplainer] = None):
        if not 0.0 <= similarity_threshold <= 1.0:
            raise ConfigurationError(f"similarity_threshold must be within [0, 1], got {similarity_threshold}")
        self.similarity_threshold = similarity_threshold
        self.scorer = scorer or ElementSimilarityScorer()
        self.explainer = explainer or DifferenceExplainer()

    def match(self, student_elements: List[CodeElement],
              reference_elements: List[CodeElement]) -> MatchOutput:
        """Match two lists of elements of one kind.

        Returns the matches plus the student and reference elements left
        over. The input lists are not modified.
        """
        exact, remaining_student, remaining_reference = self.exact_match(student_elements, reference_elements)
        similar, remaining_student, remaining_reference = self.approximate_match(
            remaining_student, remaining_reference)
        logger.debug(f"Matched {len(exact)} exact and {len(similar)} similar elements, "
                     f"{len(remaining_student)} student and {len(remaining_reference)} reference left over")
        return exact + similar, remaining_student, remaining_reference

    def exact_match(self, student_elements: List[CodeElement],
                    reference_elements: List[CodeElement]) -> MatchOutput:
        """Pair each student element with the first reference element sharing its name and signature."""
        matches = []
        unmatched_student = []
        unmatched_reference = list(reference_elements)
        for student in student_elements:
            found = None
            for reference in unmatched_reference:
                if student.is_exact_match(reference):
                    found = reference
                    break
            if found is None:
                unmatched_student.append(student)
                continue
            matches.append(self._create_match(student, found, 1.0))
            unmatched_reference.remove(found)
        return matches, unmatched_student, unmatched_reference

    def approximate_match(self, student_elements: List[CodeElement],
                          reference_elements: List[CodeElement]) -> MatchOutput:
        """Greedy best-above-threshold pairing. A student element that misses is not retried.

        Only a positive score can win, so a 0.0 score never pairs even at threshold 0.
        """
        matches = []
        unmatched_student = []
        unmatched_reference = list(reference_elements)
        for student in student_elements:
            best_score = 0.0
            best_reference = None
            for reference in unmatched_reference:
                score = self.scorer.score(student, reference)
                if score > best_score:
                    best_score = score
                    best_reference = reference
            if best_reference is not None and best_score >= self.similarity_threshold:
                matches.append(self._create_match(student, best_reference, best_score))
                unmatched_reference.remove(best_reference)
            else:
                unmatched_student.append(student)
        return matches, unmatched_student, unmatched_reference

    def _create_match(self, student: CodeElement, reference: CodeElement, similarity: float) -> MatchResult:
        differences = self.explainer.explain(student.signature, reference.signature, student.kind)
        return MatchResult(
            student_element=student,
            reference_element=reference,
            similarity=similarity,
            differences=differences,
        )


def classify(matches: List[MatchResult], unmatched_student: List[CodeElement],
             unmatched_reference: List[CodeElement]) -> None:
    """Write the match outcome back onto every element."""
    for match in matches:
        match.student_element.mark_matched(match.similarity)
        match.reference_element.mark_matched(match.similarity)
    for element in unmatched_student:
        element.mark_unmatched(MatchType.EXTRA)
    for element in unmatched_reference:
        element.mark_unmatched(MatchType.MISSING)
