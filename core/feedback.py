"""
Feedback Suggestion Module
Pre-fills a reviewer's score, comments, design-pattern and best-practice
notes from a classified element.
"""

import math
from typing import Dict, List, Optional

from .code_element import CodeElement, ElementKind, MatchType

MIN_SCORE = 0
MAX_SCORE = 100
EXACT_BONUS = 10
EXTRA_PENALTY = 20
CLOSE_ALIGNMENT_THRESHOLD = 0.8

COMMENT_HINTS = {
    'access modifier': "Check the access modifier against the expected visibility.",
    'return type': "The return type differs from the reference solution.",
    'parameters': "Review the parameter list: types, order or count differ.",
    'static': "Check whether this member should be static.",
    'final': "Check whether this member should be final.",
    'field type': "The field type differs from the reference solution.",
    'abstract': "Check whether this class should be abstract.",
    'interface': "The reference declares an interface where a class was written, or the reverse.",
}

KIND_COMMENTS = {
    ElementKind.CLASS: "Class structure and organization are important for maintainability.",
    ElementKind.METHOD: "Method implementation should follow single responsibility principle.",
    ElementKind.FIELD: "Field declarations should follow proper encapsulation principles.",
    ElementKind.CONSTRUCTOR: "Constructor should properly initialize all necessary fields.",
}

DESIGN_PATTERN_FEEDBACK = {
    ElementKind.CLASS: ("Consider applying appropriate design patterns like Singleton, Factory, "
                        "or Strategy pattern where suitable."),
    ElementKind.METHOD: ("Ensure methods follow SOLID principles, especially Single Responsibility "
                         "and Open/Closed principles."),
    ElementKind.FIELD: "Consider using private fields with appropriate getters/setters for proper encapsulation.",
    ElementKind.CONSTRUCTOR: "Constructor should use dependency injection pattern where appropriate.",
}
DEFAULT_DESIGN_PATTERN_FEEDBACK = "Apply relevant design patterns to improve code structure and maintainability."

NAMING_CONVENTIONS = {
    ElementKind.CLASS: "class names should be PascalCase.",
    ElementKind.METHOD: "method names should be camelCase and start with a verb.",
    ElementKind.FIELD: "field names should be camelCase.",
    ElementKind.CONSTRUCTOR: "constructor should validate inputs and handle edge cases.",
}


def _percent(similarity: float) -> int:
    return int(math.floor(similarity * 100 + 0.5))


def suggest_score(element: CodeElement, similarity: Optional[float] = None) -> int:
    """Suggested 0-100 score from the element's similarity and match type."""
    if similarity is None:
        similarity = element.similarity or 0.0
    base_score = _percent(similarity)

    if element.match_type == MatchType.EXACT:
        return min(MAX_SCORE, base_score + EXACT_BONUS)
    if element.match_type == MatchType.EXTRA:
        return max(MIN_SCORE, base_score - EXTRA_PENALTY)
    if element.match_type == MatchType.MISSING:
        return 0
    return base_score


def suggest_comments(differences: List[str]) -> List[str]:
    comments = []
    for difference in differences:
        lowered = difference.lower()
        hint = next((text for key, text in COMMENT_HINTS.items() if key in lowered), None)
        comments.append(hint or f"Review: {difference}")
    return comments


def match_type_comments(element: CodeElement) -> List[str]:
    """Opening remarks for the element's match outcome."""
    similarity = element.similarity or 0.0
    if element.match_type == MatchType.EXACT:
        return ["Perfect match with reference implementation."]
    if element.match_type == MatchType.SIMILAR:
        comments = [f"Good implementation with {_percent(similarity)}% similarity to reference."]
        if similarity < CLOSE_ALIGNMENT_THRESHOLD:
            comments.append("Consider reviewing the implementation for closer alignment.")
        return comments
    if element.match_type == MatchType.EXTRA:
        return [f"Additional element '{element.name}' not found in reference.",
                "Evaluate if this is necessary or could be refactored."]
    if element.match_type == MatchType.MISSING:
        return [f"The {element.kind.value.lower()} '{element.name}' is missing from your implementation.",
                "Please ensure all required functionality is implemented."]
    return []


def suggest_design_pattern_feedback(element: CodeElement) -> str:
    return DESIGN_PATTERN_FEEDBACK.get(element.kind, DEFAULT_DESIGN_PATTERN_FEEDBACK)


def suggest_best_practices_feedback(element: CodeElement) -> str:
    parts = ["Follow Java naming conventions:"]
    convention = NAMING_CONVENTIONS.get(element.kind)
    if convention:
        parts.append(convention)
    parts.append("Add meaningful comments for complex logic.")
    parts.append("Ensure proper error handling and input validation.")
    return ' '.join(parts)


def suggest_feedback(element: CodeElement, differences: Optional[List[str]] = None) -> Dict:
    """Bundle every suggestion for one element.

    Comments run from the match outcome, through the signature
    differences, to a note for the element kind.
    """
    comments = match_type_comments(element)
    comments.extend(suggest_comments(differences or []))
    kind_comment = KIND_COMMENTS.get(element.kind)
    if kind_comment:
        comments.append(kind_comment)
    return {
        'suggested_score': suggest_score(element),
        'suggested_comments': comments,
        'suggested_design_pattern_feedback': suggest_design_pattern_feedback(element),
        'suggested_best_practices_feedback': suggest_best_practices_feedback(element),
    }
