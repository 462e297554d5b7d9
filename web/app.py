"""
Web Interface for Student Code Comparison
"""

import logging
import os
import sys
import tempfile
import threading
import uuid
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from flask import Flask, request, jsonify, send_file
from comparator.report_builder import ReportBuilder
from core.comparison import compare_projects
from core.config import MatchingConfig
from core.errors import ArchiveError, ComparisonCancelled, ConfigurationError
from utils.file_utils import ensure_directory, remove_directory, unzip_to_tempdir, validate_archive

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = Flask(__name__)
config = MatchingConfig.from_env()
app.config['MAX_CONTENT_LENGTH'] = 2 * config.max_upload_bytes
analysis_slots = threading.BoundedSemaphore(config.max_concurrent_analyses)

# Use system temp directory instead of local uploads
TEMP_DIR = Path(tempfile.gettempdir()) / 'code_grader'
ensure_directory(TEMP_DIR)
REPORT_DIR = TEMP_DIR / 'reports'
ensure_directory(REPORT_DIR)


def request_config() -> MatchingConfig:
    threshold = request.form.get('threshold')
    if threshold is None or threshold == '':
        return config
    try:
        value = float(threshold)
    except ValueError:
        raise ConfigurationError(f"threshold must be a number, got {threshold!r}")
    return MatchingConfig(
        similarity_threshold=value,
        timeout_seconds=config.timeout_seconds,
        max_concurrent_analyses=config.max_concurrent_analyses,
        max_upload_bytes=config.max_upload_bytes,
    )


def save_upload(upload, work_dir: Path, side: str) -> Path:
    """Save an uploaded zip or .java file and return a directory holding its Java sources."""
    filename = upload.filename or ''
    if filename.lower().endswith('.zip'):
        zip_path = work_dir / f'{side}.zip'
        upload.save(zip_path)
        validate_archive(zip_path, config.max_upload_bytes)
        return Path(unzip_to_tempdir(zip_path))
    if filename.lower().endswith('.java'):
        side_dir = work_dir / side
        ensure_directory(side_dir)
        upload.save(side_dir / Path(filename).name)
        return side_dir
    raise ArchiveError(f"Only .zip or .java files are accepted, got {filename!r}")


def pick_upload(side: str):
    for field_name in (f'{side}_zip', f'{side}_file'):
        upload = request.files.get(field_name)
        if upload is not None and upload.filename:
            return upload
    return None


@app.route('/health')
def health():
    return jsonify({'status': 'UP'})


@app.route('/compare', methods=['POST'])
def compare_submissions():
    """Handle student and reference uploads, compare them and return JSON for the UI."""
    student_upload = pick_upload('student')
    reference_upload = pick_upload('reference')
    if student_upload is None or reference_upload is None:
        return jsonify({'error': 'Both student and reference uploads (zip or .java) are required.'}), 400

    if not analysis_slots.acquire(blocking=False):
        return jsonify({'error': 'Too many analyses in progress, try again later.'}), 429

    work_dirs = []
    try:
        match_config = request_config()
        work_dir = Path(tempfile.mkdtemp(dir=TEMP_DIR))
        work_dirs.append(work_dir)
        student_dir = save_upload(student_upload, work_dir, 'student')
        work_dirs.append(student_dir)
        reference_dir = save_upload(reference_upload, work_dir, 'reference')
        work_dirs.append(reference_dir)

        summary = compare_projects(student_dir, reference_dir, match_config)
        builder = ReportBuilder()
        builder.collect_metrics(summary)
        report_id = uuid.uuid4().hex
        builder.generate_json_report(REPORT_DIR / f'{report_id}.json')
        report = builder.build_report()
        report['report_id'] = report_id
        report['report_url'] = f'/download/report/{report_id}'
        return jsonify(report)
    except (ArchiveError, ConfigurationError) as e:
        return jsonify({'error': str(e)}), 400
    except ComparisonCancelled as e:
        return jsonify({'error': str(e)}), 504
    except Exception as e:
        logger.error(f"Comparison request failed: {str(e)}", exc_info=True)
        return jsonify({'error': str(e)}), 500
    finally:
        analysis_slots.release()
        for directory in reversed(work_dirs):
            remove_directory(directory)


@app.errorhandler(413)
def upload_too_large(error):
    return jsonify({'error': f'Upload exceeds maximum allowed size: {config.max_upload_bytes} bytes'}), 413


def report_path(report_id: str):
    """Path of a stored report, or None when the id is not one we issued."""
    try:
        parsed = uuid.UUID(report_id)
    except ValueError:
        return None
    if parsed.hex != report_id:
        return None
    path = REPORT_DIR / f'{report_id}.json'
    return path if path.is_file() else None


@app.route('/download/report/<report_id>')
def download_report(report_id):
    """Download the JSON report of one comparison."""
    path = report_path(report_id)
    if path is None:
        return jsonify({'error': 'No report available'}), 404
    return send_file(
        path,
        mimetype='application/json',
        as_attachment=True,
        download_name='comparison_report.json'
    )


if __name__ == '__main__':
    port = int(os.environ.get("PORT", 5000))
    app.run(host="0.0.0.0", port=port, debug=True)
