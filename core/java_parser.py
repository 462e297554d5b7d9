"""
Java Element Parser
Extracts classes, fields, methods and constructors from Java source using tree-sitter.
"""

import logging
import re
from pathlib import Path
from typing import List, Optional, Union

import tree_sitter_java as tsjava
from tree_sitter import Language, Node, Parser

from .code_element import CodeElement, ElementKind
from utils.file_utils import read_file_content

logger = logging.getLogger(__name__)

JAVA_LANGUAGE = Language(tsjava.language())

ACCESS_KEYWORDS = ('public', 'private', 'protected')
CLASS_NODES = ('class_declaration', 'interface_declaration')
FIELD_NODES = ('field_declaration', 'constant_declaration')

_WHITESPACE = re.compile(r'\s+')


def _new_parser() -> Parser:
    # Parser objects are not safe to share between threads.
    return Parser(JAVA_LANGUAGE)


class JavaElementExtractor:
    """Walks a tree-sitter Java tree and collects code elements in document order."""

    def __init__(self, source: bytes, file_name: str = '', package_name: str = ''):
        self.source = source
        self.file_name = file_name
        self.package_name = package_name
        self.elements: List[CodeElement] = []

    def text(self, node: Optional[Node]) -> str:
        if node is None:
            return ''
        return self.source[node.start_byte:node.end_byte].decode('utf-8', errors='replace')

    def clean(self, node: Optional[Node]) -> str:
        return _WHITESPACE.sub(' ', self.text(node)).strip()

    def visit(self, node: Node) -> None:
        if node.type in CLASS_NODES:
            self._add(node, self.text(node.child_by_field_name('name')), ElementKind.CLASS,
                      self.class_signature(node))
        elif node.type in FIELD_NODES:
            for declarator in node.children_by_field_name('declarator'):
                name = self.text(declarator.child_by_field_name('name'))
                self._add(node, name, ElementKind.FIELD, self.field_signature(node, declarator))
        elif node.type == 'method_declaration':
            self._add(node, self.text(node.child_by_field_name('name')), ElementKind.METHOD,
                      self.method_signature(node))
        elif node.type == 'constructor_declaration':
            self._add(node, self.text(node.child_by_field_name('name')), ElementKind.CONSTRUCTOR,
                      self.constructor_signature(node))
        for child in node.children:
            self.visit(child)

    def _add(self, node: Node, name: str, kind: ElementKind, signature: str) -> None:
        element = CodeElement(
            name=name,
            kind=kind,
            signature=signature,
            source_code=self.text(node),
            line_number=node.start_point[0] + 1,
            file_name=self.file_name,
            package_name=self.package_name,
        )
        self.elements.append(element)
        logger.debug(f"Found {kind.value.lower()}: {name} at line {element.line_number}")

    # --- modifiers ---

    def modifiers(self, node: Node) -> List[str]:
        for child in node.children:
            if child.type == 'modifiers':
                return [m.type for m in child.children if m.type not in ('marker_annotation', 'annotation')]
        return []

    def access_specifier(self, modifiers: List[str]) -> str:
        for keyword in ACCESS_KEYWORDS:
            if keyword in modifiers:
                return keyword
        return ''

    # --- signatures ---

    def class_signature(self, node: Node) -> str:
        modifiers = self.modifiers(node)
        parts = [self.access_specifier(modifiers)]
        if node.type == 'interface_declaration':
            parts.append('interface')
        else:
            if 'abstract' in modifiers:
                parts.append('abstract')
            if 'final' in modifiers:
                parts.append('final')
            parts.append('class')

        name = self.text(node.child_by_field_name('name'))
        type_parameters = node.child_by_field_name('type_parameters')
        if type_parameters is not None:
            names = []
            for parameter in type_parameters.children:
                if parameter.type != 'type_parameter':
                    continue
                for part in parameter.children:
                    if part.type in ('type_identifier', 'identifier'):
                        names.append(self.text(part))
                        break
            name += '<' + ', '.join(names) + '>'
        parts.append(name)

        extended, implemented = self.supertypes(node)
        if extended:
            parts.append('extends ' + ', '.join(extended))
        if implemented:
            parts.append('implements ' + ', '.join(implemented))
        return ' '.join(p for p in parts if p)

    def supertypes(self, node: Node):
        extended = []
        implemented = []
        for child in node.children:
            if child.type == 'superclass':
                extended.extend(self.simple_type_name(t) for t in child.named_children)
            elif child.type == 'extends_interfaces':
                extended.extend(self.type_list_names(child))
            elif child.type == 'super_interfaces':
                implemented.extend(self.type_list_names(child))
        return extended, implemented

    def type_list_names(self, node: Node) -> List[str]:
        names = []
        for child in node.named_children:
            if child.type == 'type_list':
                names.extend(self.simple_type_name(t) for t in child.named_children)
        return names

    def simple_type_name(self, node: Node) -> str:
        """Type name without type arguments or package scope, e.g. ``java.util.List<T>`` -> ``List``."""
        return self.clean(node).split('<', 1)[0].strip().split('.')[-1]

    def field_signature(self, node: Node, declarator: Node) -> str:
        modifiers = self.modifiers(node)
        parts = [self.access_specifier(modifiers)]
        if 'static' in modifiers:
            parts.append('static')
        if 'final' in modifiers:
            parts.append('final')
        field_type = self.clean(node.child_by_field_name('type'))
        field_type += self.clean(declarator.child_by_field_name('dimensions'))
        parts.append(field_type)
        parts.append(self.text(declarator.child_by_field_name('name')))
        return ' '.join(p for p in parts if p)

    def method_signature(self, node: Node) -> str:
        modifiers = self.modifiers(node)
        parts = [self.access_specifier(modifiers)]
        for keyword in ('static', 'abstract', 'final'):
            if keyword in modifiers:
                parts.append(keyword)
        parts.append(self.clean(node.child_by_field_name('type')))
        parts.append(self.text(node.child_by_field_name('name')) + self.parameter_list(node))
        return ' '.join(p for p in parts if p)

    def constructor_signature(self, node: Node) -> str:
        parts = [self.access_specifier(self.modifiers(node)),
                 self.text(node.child_by_field_name('name')) + self.parameter_list(node)]
        return ' '.join(p for p in parts if p)

    def parameter_list(self, node: Node) -> str:
        parameters = node.child_by_field_name('parameters')
        rendered = []
        if parameters is not None:
            for parameter in parameters.named_children:
                if parameter.type == 'formal_parameter':
                    param_type = self.clean(parameter.child_by_field_name('type'))
                    param_type += self.clean(parameter.child_by_field_name('dimensions'))
                    rendered.append(f"{param_type} {self.text(parameter.child_by_field_name('name'))}")
                elif parameter.type == 'spread_parameter':
                    rendered.append(self.spread_parameter(parameter))
        return '(' + ', '.join(rendered) + ')'

    def spread_parameter(self, node: Node) -> str:
        param_type = ''
        name = ''
        for child in node.named_children:
            if child.type == 'variable_declarator':
                name = self.text(child.child_by_field_name('name'))
            elif child.type != 'modifiers':
                param_type = self.clean(child)
        return f"{param_type}... {name}"


def parse_java_source(code: str, file_name: str = '') -> List[CodeElement]:
    """Parse Java source text and return its code elements.

    Source that does not parse cleanly yields an empty list.
    """
    try:
        source = code.encode('utf-8')
        tree = _new_parser().parse(source)
        if tree.root_node.has_error:
            logger.error(f"Failed to parse Java content for file: {file_name or '<string>'}")
            return []
        extractor = JavaElementExtractor(source, file_name, package_of(tree.root_node))
        extractor.visit(tree.root_node)
        logger.debug(f"Parsed {len(extractor.elements)} elements from {file_name or '<string>'} "
                     f"(package: {extractor.package_name or '<default>'})")
        return extractor.elements
    except Exception as e:
        logger.error(f"Error parsing Java content for file {file_name}: {str(e)}", exc_info=True)
        return []


def parse_java_file(file_path: Union[str, Path], file_name: Optional[str] = None) -> List[CodeElement]:
    """Parse a Java file from disk. Unreadable files are logged and yield an empty list."""
    path = Path(file_path)
    try:
        code = read_file_content(path)
    except OSError as e:
        logger.error(f"Java file could not be read: {path}: {str(e)}", exc_info=True)
        return []
    return parse_java_source(code, file_name or path.name)


def package_of(root: Node) -> str:
    """Dotted package name declared at the top of a compilation unit, or ''."""
    for child in root.children:
        if child.type == 'package_declaration':
            for part in child.named_children:
                if part.type in ('scoped_identifier', 'identifier'):
                    return part.text.decode('utf-8')
    return ''
