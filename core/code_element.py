"""
Code Element Module
Data model shared by the parser, the matcher and the report builder.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

EXACT_MATCH_THRESHOLD = 0.95


class ElementKind(Enum):
    CLASS = 'CLASS'
    FIELD = 'FIELD'
    METHOD = 'METHOD'
    CONSTRUCTOR = 'CONSTRUCTOR'


class MatchType(Enum):
    EXACT = 'EXACT'
    SIMILAR = 'SIMILAR'
    MISSING = 'MISSING'
    EXTRA = 'EXTRA'


@dataclass(eq=False)
class CodeElement:
    """A class, field, method or constructor pulled out of a Java file.

    Elements compare by identity so that two structurally identical
    declarations stay separate entries in the matching pools. Use
    ``is_exact_match`` for value comparison.
    """
    name: Optional[str]
    kind: ElementKind
    signature: Optional[str]
    source_code: Optional[str] = ''
    line_number: int = 0
    file_name: str = ''
    package_name: str = ''
    matched: bool = False
    match_type: Optional[MatchType] = None
    similarity: float = 0.0

    def is_exact_match(self, other: 'CodeElement') -> bool:
        return self.signature == other.signature and self.name == other.name

    def mark_matched(self, similarity: float) -> None:
        self.matched = True
        self.match_type = MatchType.EXACT if similarity >= EXACT_MATCH_THRESHOLD else MatchType.SIMILAR
        self.similarity = similarity

    def mark_unmatched(self, match_type: MatchType) -> None:
        self.matched = False
        self.match_type = match_type
        self.similarity = 0.0

    def to_dict(self) -> Dict:
        return {
            'name': self.name,
            'kind': self.kind.value,
            'signature': self.signature,
            'source_code': self.source_code,
            'line_number': self.line_number,
            'file_name': self.file_name,
            'package_name': self.package_name,
            'matched': self.matched,
            'match_type': self.match_type.value if self.match_type else None,
            'similarity': self.similarity,
        }


@dataclass
class MatchResult:
    student_element: CodeElement
    reference_element: CodeElement
    similarity: float
    differences: List[str] = field(default_factory=list)

    @property
    def kind(self) -> ElementKind:
        return self.reference_element.kind

    def to_dict(self) -> Dict:
        return {
            'kind': self.kind.value,
            'student_element': self.student_element.to_dict(),
            'reference_element': self.reference_element.to_dict(),
            'similarity': self.similarity,
            'differences': list(self.differences),
        }


@dataclass
class ComparisonSummary:
    matches: List[MatchResult] = field(default_factory=list)
    unmatched_student: List[CodeElement] = field(default_factory=list)
    unmatched_reference: List[CodeElement] = field(default_factory=list)
    overall_similarity: float = 0.0
    total_student_elements: int = 0
    total_reference_elements: int = 0

    @property
    def matched_elements(self) -> int:
        return len(self.matches)

    def matches_of_kind(self, kind: ElementKind) -> List[MatchResult]:
        return [m for m in self.matches if m.kind == kind]

    def to_dict(self) -> Dict:
        """Convert the summary into a JSON-friendly dictionary."""
        return {
            'overall_similarity': self.overall_similarity,
            'total_student_elements': self.total_student_elements,
            'total_reference_elements': self.total_reference_elements,
            'matched_elements': self.matched_elements,
            'matches': [m.to_dict() for m in self.matches],
            'unmatched_student': [e.to_dict() for e in self.unmatched_student],
            'unmatched_reference': [e.to_dict() for e in self.unmatched_reference],
        }
