"""
Difference Explainer Module
Short, human-readable notes on how two signatures differ.

The checks are plain substring and token heuristics over the rendered
signature text, not a parse of the declaration.
"""

from typing import List, Optional, Union

from .code_element import ElementKind
from .string_similarity import normalized_similarity

NULL_SIDE = "One element is null while the other is not"
ACCESS_MODIFIERS = "Different access modifiers"
RETURN_TYPES = "Different return types"
PARAMETERS = "Different parameters"
STATIC_MODIFIER = "Different static modifier"
FIELD_TYPES = "Different field types"
FINAL_MODIFIER = "Different final modifier"
ABSTRACT_MODIFIER = "Different abstract modifier"
CLASS_INTERFACE = "Different class/interface type"
SIGNIFICANT_DIFFERENCES = "Significant structural differences"
MAJOR_DIFFERENCES = "Major differences in implementation"


def extract_access_modifier(signature: str) -> str:
    for modifier in ('public', 'private', 'protected'):
        if modifier in signature:
            return modifier
    return 'package-private'


def extract_return_type(signature: str) -> str:
    """The token right before the first token that opens the parameter list."""
    parts = signature.split()
    for i in range(len(parts) - 1):
        if '(' in parts[i + 1]:
            return parts[i]
    return ''


def extract_field_type(signature: str) -> str:
    parts = signature.split()
    if len(parts) >= 2:
        return parts[-2]
    return ''


def extract_parameters(signature: str) -> str:
    start = signature.find('(')
    end = signature.find(')')
    if start != -1 and end != -1 and end > start:
        return signature[start + 1:end]
    return ''


def _presence_differs(a: str, b: str, token: str) -> bool:
    return (token in a) != (token in b)


class DifferenceExplainer:
    def explain(self, sig_a: Optional[str], sig_b: Optional[str],
                kind: Union[ElementKind, str, None]) -> List[str]:
        """List the differences between two signatures of the given element kind."""
        if sig_a is None or sig_b is None:
            return [] if sig_a is sig_b else [NULL_SIDE]
        if sig_a == sig_b:
            return []

        kind_name = kind.value if isinstance(kind, ElementKind) else str(kind or '').upper()
        if kind_name == ElementKind.METHOD.value:
            return self._method_differences(sig_a, sig_b)
        if kind_name == ElementKind.FIELD.value:
            return self._field_differences(sig_a, sig_b)
        if kind_name == ElementKind.CLASS.value:
            return self._class_differences(sig_a, sig_b)
        if kind_name == ElementKind.CONSTRUCTOR.value:
            return self._constructor_differences(sig_a, sig_b)
        return self._generic_differences(sig_a, sig_b)

    def _method_differences(self, a: str, b: str) -> List[str]:
        differences = []
        if extract_access_modifier(a) != extract_access_modifier(b):
            differences.append(ACCESS_MODIFIERS)
        if extract_return_type(a) != extract_return_type(b):
            differences.append(RETURN_TYPES)
        if extract_parameters(a) != extract_parameters(b):
            differences.append(PARAMETERS)
        if _presence_differs(a, b, 'static'):
            differences.append(STATIC_MODIFIER)
        return differences

    def _field_differences(self, a: str, b: str) -> List[str]:
        differences = []
        if extract_access_modifier(a) != extract_access_modifier(b):
            differences.append(ACCESS_MODIFIERS)
        if extract_field_type(a) != extract_field_type(b):
            differences.append(FIELD_TYPES)
        if _presence_differs(a, b, 'static'):
            differences.append(STATIC_MODIFIER)
        if _presence_differs(a, b, 'final'):
            differences.append(FINAL_MODIFIER)
        return differences

    def _class_differences(self, a: str, b: str) -> List[str]:
        differences = []
        if extract_access_modifier(a) != extract_access_modifier(b):
            differences.append(ACCESS_MODIFIERS)
        if _presence_differs(a, b, 'abstract'):
            differences.append(ABSTRACT_MODIFIER)
        if _presence_differs(a, b, 'final'):
            differences.append(FINAL_MODIFIER)
        if _presence_differs(a, b, 'interface'):
            differences.append(CLASS_INTERFACE)
        return differences

    def _constructor_differences(self, a: str, b: str) -> List[str]:
        differences = []
        if extract_access_modifier(a) != extract_access_modifier(b):
            differences.append(ACCESS_MODIFIERS)
        if extract_parameters(a) != extract_parameters(b):
            differences.append(PARAMETERS)
        return differences

    def _generic_differences(self, a: str, b: str) -> List[str]:
        differences = []
        similarity = normalized_similarity(a, b)
        if similarity < 0.8:
            differences.append(SIGNIFICANT_DIFFERENCES)
        if similarity < 0.5:
            differences.append(MAJOR_DIFFERENCES)
        return differences
