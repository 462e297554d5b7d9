"""
Report Builder Module
Generates comparison reports using Jinja2 templates.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional

import numpy as np
from jinja2 import Environment, FileSystemLoader, select_autoescape

from core.code_element import ComparisonSummary, ElementKind, MatchType
from core.feedback import suggest_feedback

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / 'templates'


def get_prediction(score: float) -> str:
    if score >= 0.75:
        return "High similarity — closely follows the reference solution"
    elif score >= 0.40:
        return "Moderate similarity — partial implementation of the reference structure"
    else:
        return "Low similarity — structure differs substantially from the reference"


class ReportBuilder:
    def __init__(self, template_dir: Optional[Path] = None):
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir or TEMPLATE_DIR)),
            autoescape=select_autoescape(['html']),
        )
        self.template = self.env.get_template('report.html')
        self.summary: Optional[ComparisonSummary] = None
        self.data: Dict = {}

    def collect_metrics(self, summary: ComparisonSummary) -> Dict:
        """Collect and organize comparison metrics."""
        self.summary = summary
        similarities = [m.similarity for m in summary.matches]
        per_kind = {}
        for kind in ElementKind:
            per_kind[kind.value] = {
                'matched': len(summary.matches_of_kind(kind)),
                'extra': sum(1 for e in summary.unmatched_student if e.kind == kind),
                'missing': sum(1 for e in summary.unmatched_reference if e.kind == kind),
            }
        match_types = {t.value: 0 for t in MatchType}
        for match in summary.matches:
            match_types[match.student_element.match_type.value] += 1
        match_types[MatchType.EXTRA.value] = len(summary.unmatched_student)
        match_types[MatchType.MISSING.value] = len(summary.unmatched_reference)

        self.data = {
            'overall_similarity': summary.overall_similarity,
            'prediction': get_prediction(summary.overall_similarity),
            'total_student_elements': summary.total_student_elements,
            'total_reference_elements': summary.total_reference_elements,
            'matched_elements': summary.matched_elements,
            'mean_match_similarity': float(np.mean(similarities)) if similarities else 0.0,
            'median_match_similarity': float(np.median(similarities)) if similarities else 0.0,
            'percent_matches_above_90': (sum(1 for s in similarities if s >= 0.9) / len(similarities)
                                         if similarities else 0.0),
            'per_kind': per_kind,
            'match_types': match_types,
        }
        return self.data

    def build_report(self) -> Dict:
        """Metrics plus the full summary, with a feedback suggestion for every element."""
        if self.summary is None:
            raise ValueError("collect_metrics() must be called before building a report")
        report = self.summary.to_dict()
        for match, entry in zip(self.summary.matches, report['matches']):
            entry['suggestion'] = suggest_feedback(match.student_element, match.differences)
        for element, entry in zip(self.summary.unmatched_student, report['unmatched_student']):
            entry['suggestion'] = suggest_feedback(element)
        for element, entry in zip(self.summary.unmatched_reference, report['unmatched_reference']):
            entry['suggestion'] = suggest_feedback(element)
        report['metrics'] = self.data
        return report

    def generate_html_report(self, output_path) -> Path:
        """Generate HTML report with matched, missing and extra elements."""
        output_path = Path(output_path)
        try:
            html = self.template.render(report=self.build_report())
            output_path.write_text(html, encoding='utf-8')
            logger.info(f"HTML report written to {output_path}")
            return output_path
        except Exception as e:
            logger.error(f"Error generating HTML report: {str(e)}", exc_info=True)
            raise

    def generate_json_report(self, output_path) -> Path:
        """Generate JSON report with raw comparison data."""
        output_path = Path(output_path)
        try:
            with open(output_path, 'w', encoding='utf-8') as f:
                json.dump(self.build_report(), f, indent=2)
            logger.info(f"JSON report written to {output_path}")
            return output_path
        except Exception as e:
            logger.error(f"Error generating JSON report: {str(e)}", exc_info=True)
            raise
