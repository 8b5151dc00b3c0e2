"""Versioned release files.

A release file is a one-line text file `<service>:<tag>` named
`[RELEASE] <service>-<tag>.txt`. Files are written to a chosen directory,
or to the temp dir for a browser download when no directory is set.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from .errors import ReleaseFileError
from .io_utils import write_temp_text

logger = logging.getLogger(__name__)

SERVICE_NAME_PATTERN = re.compile(r'[a-zA-Z0-9- ]+')
TAG_PATTERN = re.compile(r'[0-9]+\.[0-9]+\.[0-9]+')
RELEASE_SUFFIX = '.txt'
DOWNLOADS_PATH = 'Downloads folder'
TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'

SOURCE_DIRECTORY = 'directory'
SOURCE_DOWNLOAD = 'download'


@dataclass(frozen=True)
class ReleaseFile:
    filename: str
    content: str


@dataclass(frozen=True)
class RecentFile:
    name: str
    path: str
    created_at: str
    source: str


def normalize_service_name(name: Optional[str]) -> str:
    if not name:
        raise ReleaseFileError("Service name is required")
    if not SERVICE_NAME_PATTERN.fullmatch(name):
        raise ReleaseFileError("Service name can only contain letters, numbers, and hyphens")
    normalized = re.sub(r'\s+', '-', name.strip()).lower()
    if not normalized:
        raise ReleaseFileError("Service name is required")
    return normalized


def validate_tag(tag: Optional[str]) -> str:
    if not tag:
        raise ReleaseFileError("Tag is required")
    if not TAG_PATTERN.fullmatch(tag):
        raise ReleaseFileError("Tag must be in format X.X.X")
    return tag


def build_release_file(service_name: Optional[str], tag: Optional[str]) -> ReleaseFile:
    service = normalize_service_name(service_name)
    tag = validate_tag(tag)
    return ReleaseFile(
        filename=f"[RELEASE] {service}-{tag}{RELEASE_SUFFIX}",
        content=f"{service}:{tag}",
    )


def preview_filename(service_name: Optional[str], tag: Optional[str]) -> str:
    """Filename preview shown while the form is being filled in; no validation."""
    service = re.sub(r'\s+', '-', service_name or 'service-name').lower()
    return f"{service}-{tag or '0.0.0'}{RELEASE_SUFFIX}"


def is_duplicate(recent_files: Iterable[RecentFile], filename: str) -> bool:
    wanted = filename.lower()
    return any(f.name.lower() == wanted for f in recent_files)


def _timestamp(when: Optional[datetime] = None) -> str:
    return (when or datetime.now()).strftime(TIMESTAMP_FORMAT)


def save_file_to_directory(directory, filename: str, content: str) -> RecentFile:
    directory = Path(directory)
    (directory / filename).write_text(content, encoding='utf-8')
    logger.info("Saved %s to %s", filename, directory)
    return RecentFile(
        name=filename,
        path=f"{directory.name}/{filename}",
        created_at=_timestamp(),
        source=SOURCE_DIRECTORY,
    )


def write_download_file(filename: str, content: str) -> Tuple[str, RecentFile]:
    path = write_temp_text(filename, content)
    return path, RecentFile(
        name=filename,
        path=DOWNLOADS_PATH,
        created_at=_timestamp(),
        source=SOURCE_DOWNLOAD,
    )


def load_recent_files(directory) -> List[RecentFile]:
    """List the `.txt` files of `directory`, newest first."""
    directory = Path(directory)
    entries = []
    for entry in directory.iterdir():
        if not entry.is_file() or not entry.name.endswith(RELEASE_SUFFIX):
            continue
        try:
            modified = entry.stat().st_mtime
        except OSError as exc:
            logger.warning("Failed to get metadata for %s: %s", entry.name, exc)
            continue
        entries.append((modified, entry.name))

    entries.sort(key=lambda item: item[0], reverse=True)
    return [
        RecentFile(
            name=name,
            path=f"{directory.name}/{name}",
            created_at=_timestamp(datetime.fromtimestamp(modified)),
            source=SOURCE_DIRECTORY,
        )
        for modified, name in entries
    ]


def delete_file(file: RecentFile, directory=None) -> None:
    """Remove a directory-sourced file from disk.

    Downloaded files only live in the recent list, so nothing is removed.
    """
    if file.source != SOURCE_DIRECTORY:
        return
    if directory is None:
        raise ReleaseFileError("Directory not selected")
    (Path(directory) / file.name).unlink()
    logger.info("Deleted %s from %s", file.name, directory)
