"""
File Utilities Module
Archive extraction and Java source discovery for uploaded submissions.
"""

import os
import shutil
import tempfile
import zipfile
from pathlib import Path
from typing import List

from core.config import DEFAULT_MAX_UPLOAD_BYTES
from core.errors import ArchiveError

JAVA_EXTENSION = '.java'
IGNORED_DIRECTORIES = {'__MACOSX'}


def normalize_path(path: str | Path) -> Path:
    """Convert string path to normalized Path object."""
    return Path(path).resolve()


def is_hidden(path: Path) -> bool:
    """Check if a file or directory is hidden."""
    return path.name.startswith('.') or path.name in IGNORED_DIRECTORIES


def list_java_files(path: str | Path) -> List[Path]:
    """
    Recursively collect all Java source files under a directory.

    Hidden files and directories (and macOS archive metadata) are skipped.
    The result is sorted so that matching order is stable across platforms.

    Args:
        path: Base directory path, or a single ``.java`` file

    Returns:
        List of Path objects for matching files
    """
    base_path = normalize_path(path)
    if base_path.is_file():
        return [base_path] if base_path.suffix.lower() == JAVA_EXTENSION else []

    matching_files = []
    for root, dirs, files in os.walk(base_path):
        dirs[:] = [d for d in dirs if not is_hidden(Path(root) / d)]
        for file in files:
            file_path = Path(root) / file
            if is_hidden(file_path):
                continue
            if file.lower().endswith(JAVA_EXTENSION):
                matching_files.append(file_path)
    return sorted(matching_files)


def validate_archive(zip_path: str | Path, max_size: int = DEFAULT_MAX_UPLOAD_BYTES) -> None:
    """Raise ArchiveError unless zip_path is a non-empty zip file within max_size bytes."""
    path = Path(zip_path)
    if not path.is_file():
        raise ArchiveError(f"ZIP file not found: {path}")
    size = path.stat().st_size
    if size == 0:
        raise ArchiveError("File is empty")
    if size > max_size:
        raise ArchiveError(f"File size exceeds maximum allowed size: {max_size} bytes")
    if not zipfile.is_zipfile(path):
        raise ArchiveError("Only ZIP files are allowed")


def unzip_to_tempdir(zip_path: str | Path) -> str:
    """Unzips a zip file to a temporary directory and returns the path."""
    temp_dir = tempfile.mkdtemp(prefix='grader_')
    try:
        with zipfile.ZipFile(zip_path, 'r') as zip_ref:
            for member in zip_ref.namelist():
                target = os.path.realpath(os.path.join(temp_dir, member))
                if not target.startswith(os.path.realpath(temp_dir) + os.sep):
                    raise ArchiveError(f"Archive entry escapes extraction directory: {member}")
            zip_ref.extractall(temp_dir)
    except zipfile.BadZipFile as e:
        remove_directory(temp_dir)
        raise ArchiveError(f"Failed to extract ZIP file: {e}") from e
    except ArchiveError:
        remove_directory(temp_dir)
        raise
    return temp_dir


def ensure_directory(directory: Path) -> None:
    """Ensure directory exists, create if necessary."""
    directory.mkdir(parents=True, exist_ok=True)


def remove_directory(directory: str | Path) -> None:
    shutil.rmtree(directory, ignore_errors=True)


def read_file_content(file_path: Path) -> str:
    """
    Read file content, trying UTF-8 first.

    Args:
        file_path: Path to the file to read

    Returns:
        File contents as string

    Raises:
        FileNotFoundError: If file doesn't exist
        IOError: If file can't be read
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            return f.read()
    except UnicodeDecodeError:
        # latin-1 decodes any byte sequence
        with open(file_path, 'r', encoding='latin-1') as f:
            return f.read()
