"""
Element Similarity Scorer
Weighted blend of signature, name and structural similarity for a pair of elements.
"""

import logging

from .code_element import CodeElement
from .string_similarity import normalized_similarity
from .structural_features import structural_similarity

logger = logging.getLogger(__name__)

SIGNATURE_WEIGHT = 0.4
NAME_WEIGHT = 0.3
STRUCTURE_WEIGHT = 0.3


class ElementSimilarityScorer:
    def __init__(self, signature_weight: float = SIGNATURE_WEIGHT,
                 name_weight: float = NAME_WEIGHT,
                 structure_weight: float = STRUCTURE_WEIGHT):
        self.signature_weight = signature_weight
        self.name_weight = name_weight
        self.structure_weight = structure_weight

    def score(self, student: CodeElement, reference: CodeElement) -> float:
        """Return a similarity score between 0 and 1 for two elements of the same kind."""
        signature_sim = normalized_similarity(student.signature, reference.signature)
        name_sim = normalized_similarity(student.name, reference.name)
        structure_sim = structural_similarity(student.source_code, reference.source_code)

        overall = (signature_sim * self.signature_weight +
                   name_sim * self.name_weight +
                   structure_sim * self.structure_weight)

        logger.debug(f"Similarity {student.name!r} vs {reference.name!r} - signature: {signature_sim:.3f}, "
                     f"name: {name_sim:.3f}, structure: {structure_sim:.3f}, overall: {overall:.3f}")
        return min(1.0, overall)
