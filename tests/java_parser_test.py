import sys
import os
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from core.code_element import ElementKind, MatchType
from core.comparison import compare, compare_projects
from core.java_parser import parse_java_file, parse_java_source

SHAPE_SOURCE = """package com.example.shapes;

import java.io.Serializable;
import java.util.List;

public abstract class Shape<T> extends Base implements Comparable, Serializable {
    private static final int MAX_SIDES = 12;
    protected String name, label;
    int[] sides;

    public Shape(String name) {
        this.name = name;
    }

    public abstract double area();

    public static int count(List<Shape> shapes, int limit) {
        int total = 0;
        for (Shape s : shapes) {
            if (total < limit) {
                total++;
            }
        }
        return total;
    }

    interface Visitor {
        void visit(Shape s);
    }
}
"""


@pytest.fixture
def elements():
    return parse_java_source(SHAPE_SOURCE, 'Shape.java')


def signatures(elements, kind):
    return [e.signature for e in elements if e.kind == kind]


def test_class_signatures(elements):
    assert signatures(elements, ElementKind.CLASS) == [
        'public abstract class Shape<T> extends Base implements Comparable, Serializable',
        'interface Visitor',
    ]


def test_field_signatures_one_per_declarator(elements):
    assert signatures(elements, ElementKind.FIELD) == [
        'private static final int MAX_SIDES',
        'protected String name',
        'protected String label',
        'int[] sides',
    ]


def test_method_and_constructor_signatures(elements):
    assert signatures(elements, ElementKind.CONSTRUCTOR) == ['public Shape(String name)']
    assert signatures(elements, ElementKind.METHOD) == [
        'public abstract double area()',
        'public static int count(List<Shape> shapes, int limit)',
        'void visit(Shape s)',
    ]


def test_element_locations(elements):
    shape = elements[0]
    assert shape.name == 'Shape'
    assert shape.line_number == 6
    assert shape.file_name == 'Shape.java'
    count = next(e for e in elements if e.name == 'count')
    assert count.line_number == 17
    assert count.source_code.startswith('public static int count(')
    assert count.source_code.rstrip().endswith('}')


def test_varargs_parameter():
    elements = parse_java_source('class Log { void info(String format, Object... args) { } }')
    assert signatures(elements, ElementKind.METHOD) == ['void info(String format, Object... args)']


def test_broken_source_yields_no_elements():
    assert parse_java_source('public class { void (') == []


def test_empty_source_yields_no_elements():
    assert parse_java_source('') == []


def test_elements_carry_package_name(elements):
    assert {e.package_name for e in elements} == {'com.example.shapes'}
    assert parse_java_source('class A { }')[0].package_name == ''
    assert elements[0].to_dict()['package_name'] == 'com.example.shapes'


def test_parse_java_file(tmp_path):
    path = tmp_path / 'Shape.java'
    path.write_text(SHAPE_SOURCE, encoding='utf-8')
    elements = parse_java_file(path)
    assert len(elements) == 10
    assert all(e.file_name == 'Shape.java' for e in elements)


def test_parse_missing_file_yields_no_elements(tmp_path):
    assert parse_java_file(tmp_path / 'Nope.java') == []


def test_parsed_sources_compare_end_to_end():
    student_source = SHAPE_SOURCE.replace('public abstract double area();', 'public abstract int area();')
    student_source = student_source.replace('int[] sides;', '')
    summary = compare(parse_java_source(student_source), parse_java_source(SHAPE_SOURCE))

    missing = [e.signature for e in summary.unmatched_reference]
    assert missing == ['int[] sides']
    assert summary.unmatched_student == []
    area = next(m for m in summary.matches if m.reference_element.name == 'area')
    assert area.differences == ['Different return types']
    assert area.student_element.match_type in (MatchType.EXACT, MatchType.SIMILAR)
    assert 0 < summary.overall_similarity < 1


def test_compare_projects(tmp_path):
    student_dir = tmp_path / 'student' / 'src'
    reference_dir = tmp_path / 'reference' / 'src'
    student_dir.mkdir(parents=True)
    reference_dir.mkdir(parents=True)
    (student_dir / 'Shape.java').write_text(SHAPE_SOURCE, encoding='utf-8')
    (reference_dir / 'Shape.java').write_text(SHAPE_SOURCE, encoding='utf-8')
    (reference_dir / 'Circle.java').write_text('public class Circle { private double radius; }',
                                               encoding='utf-8')

    summary = compare_projects(tmp_path / 'student', tmp_path / 'reference')
    assert summary.matched_elements == 10
    assert {e.name for e in summary.unmatched_reference} == {'Circle', 'radius'}
    assert summary.unmatched_reference[0].file_name == os.path.join('src', 'Circle.java')
    assert summary.overall_similarity == pytest.approx(10 / 12)
