import sys
import os
import zipfile
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from core.errors import ArchiveError
from utils.file_utils import (
    is_hidden, list_java_files, read_file_content, remove_directory, unzip_to_tempdir, validate_archive
)


def make_zip(path, entries):
    with zipfile.ZipFile(path, 'w') as zf:
        for name, content in entries.items():
            zf.writestr(name, content)
    return path


def test_list_java_files_skips_hidden_and_non_java(tmp_path):
    (tmp_path / 'src').mkdir()
    (tmp_path / 'src' / 'B.java').write_text('class B {}')
    (tmp_path / 'A.java').write_text('class A {}')
    (tmp_path / 'notes.txt').write_text('x')
    (tmp_path / '.Hidden.java').write_text('class H {}')
    (tmp_path / '__MACOSX').mkdir()
    (tmp_path / '__MACOSX' / 'A.java').write_text('junk')
    (tmp_path / '.git').mkdir()
    (tmp_path / '.git' / 'C.java').write_text('class C {}')

    files = list_java_files(tmp_path)
    assert [f.name for f in files] == ['A.java', 'B.java']


def test_list_java_files_accepts_single_file(tmp_path):
    path = tmp_path / 'A.java'
    path.write_text('class A {}')
    assert list_java_files(path) == [path.resolve()]
    other = tmp_path / 'A.txt'
    other.write_text('x')
    assert list_java_files(other) == []


def test_is_hidden(tmp_path):
    assert is_hidden(tmp_path / '.DS_Store')
    assert is_hidden(tmp_path / '__MACOSX')
    assert not is_hidden(tmp_path / 'Main.java')


def test_validate_archive(tmp_path):
    archive = make_zip(tmp_path / 'ok.zip', {'A.java': 'class A {}'})
    validate_archive(archive)

    with pytest.raises(ArchiveError, match='not found'):
        validate_archive(tmp_path / 'missing.zip')

    empty = tmp_path / 'empty.zip'
    empty.write_bytes(b'')
    with pytest.raises(ArchiveError, match='File is empty'):
        validate_archive(empty)

    with pytest.raises(ArchiveError, match='exceeds maximum'):
        validate_archive(archive, max_size=10)

    fake = tmp_path / 'fake.zip'
    fake.write_text('not a zip at all')
    with pytest.raises(ArchiveError, match='Only ZIP files'):
        validate_archive(fake)


def test_unzip_to_tempdir(tmp_path):
    archive = make_zip(tmp_path / 'project.zip', {'src/A.java': 'class A {}', 'README': 'hi'})
    extracted = unzip_to_tempdir(archive)
    try:
        assert [f.name for f in list_java_files(extracted)] == ['A.java']
    finally:
        remove_directory(extracted)
    assert not os.path.exists(extracted)


def test_unzip_rejects_path_traversal(tmp_path):
    archive = make_zip(tmp_path / 'evil.zip', {'../escape.java': 'class E {}'})
    with pytest.raises(ArchiveError, match='escapes'):
        unzip_to_tempdir(archive)
    assert not (tmp_path / 'escape.java').exists()


def test_unzip_rejects_corrupt_archive(tmp_path):
    archive = tmp_path / 'broken.zip'
    archive.write_bytes(b'PK\x03\x04 definitely broken')
    with pytest.raises(ArchiveError):
        unzip_to_tempdir(archive)


def test_read_file_content_falls_back_to_latin1(tmp_path):
    path = tmp_path / 'Legacy.java'
    path.write_bytes('// caf\xe9\nclass Legacy {}'.encode('latin-1'))
    assert read_file_content(path) == '// caf\xe9\nclass Legacy {}'
