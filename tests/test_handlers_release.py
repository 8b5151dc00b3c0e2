import tempfile

from curl_generator.handlers_release import (
    create_release_file_handler,
    delete_release_file_handler,
    load_directory_handler,
    preview_filename_handler,
    recent_file_rows,
)
from curl_generator.release_files import SOURCE_DIRECTORY, SOURCE_DOWNLOAD


def test_preview_filename_handler():
    assert preview_filename_handler("My Service", "1.2.3") == "my-service-1.2.3.txt"


def test_create_release_file_in_directory(tmp_path):
    recent, rows, _, download, status = create_release_file_handler("Payments", "1.0.0", str(tmp_path), [])

    assert (tmp_path / "[RELEASE] payments-1.0.0.txt").read_text(encoding="utf-8") == "payments:1.0.0"
    assert download is None
    assert [f.name for f in recent] == ["[RELEASE] payments-1.0.0.txt"]
    assert rows[0][0] == "[RELEASE] payments-1.0.0.txt"
    assert rows[0][3] == SOURCE_DIRECTORY
    assert status == f"[RELEASE] payments-1.0.0.txt saved to {tmp_path.name}"


def test_create_release_file_rejects_duplicates(tmp_path):
    recent, *_ = create_release_file_handler("payments", "1.0.0", str(tmp_path), [])

    again, rows, _, download, status = create_release_file_handler("PAYMENTS", "1.0.0", str(tmp_path), recent)

    assert len(again) == 1
    assert len(rows) == 1
    assert download is None
    assert status == "File already exists. Rename the service or increment the version tag."


def test_create_release_file_falls_back_to_download(monkeypatch, tmp_path):
    monkeypatch.setattr(tempfile, "tempdir", str(tmp_path))

    recent, _, _, download, status = create_release_file_handler("svc", "2.0.0", "", None)

    assert download == str(tmp_path / "[RELEASE] svc-2.0.0.txt")
    assert recent[0].source == SOURCE_DOWNLOAD
    assert status == "[RELEASE] svc-2.0.0.txt is ready to download."


def test_create_release_file_reports_validation_errors(tmp_path):
    recent, rows, _, download, status = create_release_file_handler("svc", "1.0", str(tmp_path), [])

    assert recent == []
    assert rows == []
    assert download is None
    assert status == "Tag must be in format X.X.X"


def test_create_release_file_reports_missing_directory(tmp_path):
    missing = tmp_path / "nope"

    _, _, _, _, status = create_release_file_handler("svc", "1.0.0", str(missing), [])

    assert status == f"Directory not found: {missing}"


def test_load_directory_handler_keeps_downloads(monkeypatch, tmp_path):
    download_dir = tmp_path / "downloads"
    release_dir = tmp_path / "releases"
    download_dir.mkdir()
    release_dir.mkdir()
    (release_dir / "[RELEASE] a-1.0.0.txt").write_text("a:1.0.0", encoding="utf-8")
    monkeypatch.setattr(tempfile, "tempdir", str(download_dir))
    recent, *_ = create_release_file_handler("b", "1.0.0", "", [])

    loaded, rows, _, status = load_directory_handler(str(release_dir), recent)

    assert [f.name for f in loaded] == ["[RELEASE] a-1.0.0.txt", "[RELEASE] b-1.0.0.txt"]
    assert [row[3] for row in rows] == [SOURCE_DIRECTORY, SOURCE_DOWNLOAD]
    assert status == "Loaded 1 files from releases."


def test_load_directory_handler_without_directory():
    recent, rows, _, status = load_directory_handler("  ", [])

    assert recent == []
    assert rows == []
    assert status == "No directory selected. Files will be downloaded."


def test_delete_release_file_handler(tmp_path):
    recent, *_ = create_release_file_handler("svc", "1.0.0", str(tmp_path), [])

    remaining, rows, _, status = delete_release_file_handler("[RELEASE] svc-1.0.0.txt", str(tmp_path), recent)

    assert remaining == []
    assert rows == []
    assert not (tmp_path / "[RELEASE] svc-1.0.0.txt").exists()
    assert status == "[RELEASE] svc-1.0.0.txt has been deleted from directory"


def test_delete_release_file_handler_without_directory(tmp_path):
    recent, *_ = create_release_file_handler("svc", "1.0.0", str(tmp_path), [])

    remaining, _, _, status = delete_release_file_handler("[RELEASE] svc-1.0.0.txt", "", recent)

    assert len(remaining) == 1
    assert status == "Deletion failed: Directory not selected"
    assert (tmp_path / "[RELEASE] svc-1.0.0.txt").exists()


def test_delete_release_file_handler_needs_selection():
    _, _, _, status = delete_release_file_handler(None, "", [])

    assert status == "Select a file to delete."


def test_recent_file_rows_handles_empty_state():
    assert recent_file_rows(None) == []
