import sys
import os
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from core.code_element import CodeElement, ElementKind, MatchType
from core.feedback import suggest_comments, suggest_feedback, suggest_score


def classified(match_type, similarity=0.0, name='area', kind=ElementKind.METHOD):
    element = CodeElement(name=name, kind=kind, signature=f'public double {name}()')
    if match_type in (MatchType.EXACT, MatchType.SIMILAR):
        element.mark_matched(similarity)
        element.match_type = match_type
    else:
        element.mark_unmatched(match_type)
    return element


@pytest.mark.parametrize('match_type, similarity, expected', [
    (MatchType.EXACT, 1.0, 100),
    (MatchType.EXACT, 0.955, 100),
    (MatchType.EXACT, 0.85, 95),
    (MatchType.SIMILAR, 0.824, 82),
    (MatchType.SIMILAR, 0.125, 13),
    (MatchType.MISSING, 0.0, 0),
    (MatchType.EXTRA, 0.0, 0),
])
def test_suggest_score(match_type, similarity, expected):
    assert suggest_score(classified(match_type, similarity)) == expected


def test_suggest_score_with_explicit_similarity():
    element = classified(MatchType.EXTRA)
    assert suggest_score(element, 0.5) == 30
    assert suggest_score(element, 0.1) == 0


def test_suggest_comments_maps_known_differences():
    comments = suggest_comments(["Different return types", "Different parameters"])
    assert comments == [
        "The return type differs from the reference solution.",
        "Review the parameter list: types, order or count differ.",
    ]


def test_suggest_comments_falls_back_to_raw_difference():
    assert suggest_comments(["Major differences in implementation"]) == [
        "Review: Major differences in implementation"]
    assert suggest_comments([]) == []


def test_suggest_feedback_for_exact_match():
    feedback = suggest_feedback(classified(MatchType.EXACT, 1.0, kind=ElementKind.CLASS))
    assert feedback['suggested_score'] == 100
    assert feedback['suggested_comments'] == [
        "Perfect match with reference implementation.",
        "Class structure and organization are important for maintainability.",
    ]


def test_suggest_feedback_for_close_similar_match():
    feedback = suggest_feedback(classified(MatchType.SIMILAR, 0.91), ["Different static modifier"])
    assert feedback['suggested_score'] == 91
    assert feedback['suggested_comments'] == [
        "Good implementation with 91% similarity to reference.",
        "Check whether this member should be static.",
        "Method implementation should follow single responsibility principle.",
    ]


def test_suggest_feedback_for_loose_similar_match():
    feedback = suggest_feedback(classified(MatchType.SIMILAR, 0.72))
    assert feedback['suggested_comments'][:2] == [
        "Good implementation with 72% similarity to reference.",
        "Consider reviewing the implementation for closer alignment.",
    ]


def test_suggest_feedback_for_missing_element():
    feedback = suggest_feedback(classified(MatchType.MISSING, name='radius', kind=ElementKind.FIELD))
    assert feedback['suggested_score'] == 0
    assert feedback['suggested_comments'] == [
        "The field 'radius' is missing from your implementation.",
        "Please ensure all required functionality is implemented.",
        "Field declarations should follow proper encapsulation principles.",
    ]


def test_suggest_feedback_for_extra_element():
    feedback = suggest_feedback(classified(MatchType.EXTRA, name='debugDump', kind=ElementKind.CONSTRUCTOR))
    assert feedback['suggested_comments'] == [
        "Additional element 'debugDump' not found in reference.",
        "Evaluate if this is necessary or could be refactored.",
        "Constructor should properly initialize all necessary fields.",
    ]


@pytest.mark.parametrize('kind, design_pattern, naming', [
    (ElementKind.CLASS, "Singleton, Factory, or Strategy", "class names should be PascalCase."),
    (ElementKind.METHOD, "SOLID principles", "method names should be camelCase and start with a verb."),
    (ElementKind.FIELD, "getters/setters", "field names should be camelCase."),
    (ElementKind.CONSTRUCTOR, "dependency injection", "constructor should validate inputs and handle edge cases."),
])
def test_design_pattern_and_best_practices_per_kind(kind, design_pattern, naming):
    feedback = suggest_feedback(classified(MatchType.SIMILAR, 0.85, kind=kind))
    assert design_pattern in feedback['suggested_design_pattern_feedback']
    assert feedback['suggested_best_practices_feedback'] == (
        f"Follow Java naming conventions: {naming} Add meaningful comments for complex logic. "
        "Ensure proper error handling and input validation.")
