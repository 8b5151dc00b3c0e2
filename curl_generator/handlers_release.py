from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import gradio as gr

from .errors import ReleaseFileError
from .release_files import (
    SOURCE_DIRECTORY,
    RecentFile,
    build_release_file,
    delete_file,
    is_duplicate,
    load_recent_files,
    preview_filename,
    save_file_to_directory,
    write_download_file,
)

logger = logging.getLogger(__name__)

RECENT_FILE_HEADERS = ["Name", "Location", "Created", "Source"]


def recent_file_rows(recent_files: Optional[List[RecentFile]]):
    return [[f.name, f.path, f.created_at, f.source] for f in (recent_files or [])]


def recent_file_outputs(recent_files: List[RecentFile]):
    """State, table rows and delete-dropdown update for a recent-files list."""
    names = [f.name for f in recent_files]
    return recent_files, recent_file_rows(recent_files), gr.update(choices=names, value=None)


def resolve_directory(directory) -> Optional[Path]:
    """Return the chosen directory, or None to fall back to downloads."""
    if directory is None:
        return None
    directory = str(directory).strip()
    if not directory:
        return None
    path = Path(directory).expanduser()
    if not path.is_dir():
        raise ReleaseFileError(f"Directory not found: {directory}")
    return path


def preview_filename_handler(service_name, tag):
    return preview_filename(service_name, tag)


def create_release_file_handler(service_name, tag, directory, recent_files):
    recent_files = list(recent_files or [])

    try:
        release = build_release_file(service_name, tag)
        target = resolve_directory(directory)
    except ReleaseFileError as exc:
        return (*recent_file_outputs(recent_files), None, str(exc))

    if is_duplicate(recent_files, release.filename):
        return (
            *recent_file_outputs(recent_files),
            None,
            "File already exists. Rename the service or increment the version tag.",
        )

    if target is not None:
        try:
            new_file = save_file_to_directory(target, release.filename, release.content)
        except OSError as exc:
            logger.error("Failed to save %s: %s", release.filename, exc)
            return (*recent_file_outputs(recent_files), None, "Save failed. Please check directory permissions.")
        recent_files.insert(0, new_file)
        return (*recent_file_outputs(recent_files), None, f"{release.filename} saved to {target.name}")

    try:
        path, new_file = write_download_file(release.filename, release.content)
    except OSError as exc:
        logger.error("Failed to prepare download for %s: %s", release.filename, exc)
        return (*recent_file_outputs(recent_files), None, f"Save failed: {str(exc)}")
    recent_files.insert(0, new_file)
    return (*recent_file_outputs(recent_files), path, f"{release.filename} is ready to download.")


def load_directory_handler(directory, recent_files):
    recent_files = list(recent_files or [])

    try:
        target = resolve_directory(directory)
    except ReleaseFileError as exc:
        return (*recent_file_outputs(recent_files), str(exc))

    if target is None:
        return (*recent_file_outputs(recent_files), "No directory selected. Files will be downloaded.")

    try:
        loaded = load_recent_files(target)
    except OSError as exc:
        logger.error("Failed to list %s: %s", target, exc)
        return (*recent_file_outputs(recent_files), f"Error reading directory: {str(exc)}")

    # Downloads are not on disk, so keep them after the directory listing.
    downloads = [f for f in recent_files if f.source != SOURCE_DIRECTORY]
    merged = loaded + downloads
    return (*recent_file_outputs(merged), f"Loaded {len(loaded)} files from {target.name}.")


def delete_release_file_handler(file_name, directory, recent_files):
    recent_files = list(recent_files or [])
    match = next((f for f in recent_files if f.name == file_name), None)
    if match is None:
        return (*recent_file_outputs(recent_files), "Select a file to delete.")

    try:
        delete_file(match, resolve_directory(directory))
    except (ReleaseFileError, OSError) as exc:
        logger.error("Failed to delete %s: %s", match.name, exc)
        return (*recent_file_outputs(recent_files), f"Deletion failed: {str(exc)}")

    remaining = [f for f in recent_files if f.name != match.name]
    if match.source == SOURCE_DIRECTORY:
        message = f"{match.name} has been deleted from directory"
    else:
        message = f"{match.name} has been removed from recent files"
    return (*recent_file_outputs(remaining), message)
