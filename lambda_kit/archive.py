"""
archive
-------

배포용 zip 아카이브를 읽거나, 소스 디렉토리로부터 만든다.
"""

from __future__ import annotations

import os
import zipfile
from typing import Iterable, Optional

from .errors import MissingFileError, ValidationError, WriteError
from .logging_utils import get_logger


logger = get_logger(__name__)

_SKIP_DIRS = {"__pycache__", ".git", ".venv", ".pytest_cache"}


def read_archive(archive_name: str, base_dir: str = ".") -> bytes:
    if not archive_name:
        raise ValidationError("Invalid archive name")

    path = archive_name if os.path.isabs(archive_name) else os.path.join(base_dir, archive_name)
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise MissingFileError(f"Archive {archive_name} not found") from e

    logger.debug("아카이브 로드: %s (%d bytes)", path, len(data))
    return data


def _iter_files(source_dir: str, exclude: Iterable[str]) -> Iterable[str]:
    excluded = {os.path.normpath(p) for p in exclude}
    for root, dirs, files in os.walk(source_dir):
        dirs[:] = sorted(d for d in dirs if d not in _SKIP_DIRS)
        for fname in sorted(files):
            if fname.endswith(".pyc"):
                continue
            path = os.path.join(root, fname)
            if os.path.normpath(path) in excluded:
                continue
            yield path


def build_archive(source_dir: str, archive_path: str,
                  exclude: Optional[Iterable[str]] = None) -> int:
    """
    source_dir 의 파일들을 archive_path 에 zip 으로 묶는다.
    아카이브 안의 경로는 source_dir 기준 상대경로이며, 묶은 파일 수를 반환한다.
    """
    if not os.path.isdir(source_dir):
        raise MissingFileError(f"Source directory {source_dir} not found")

    # 아카이브가 source_dir 안에 생기면 자기 자신을 묶지 않도록 제외한다.
    skip = list(exclude or []) + [archive_path]
    count = 0
    try:
        with zipfile.ZipFile(archive_path, "w", zipfile.ZIP_DEFLATED) as zf:
            for path in _iter_files(source_dir, skip):
                zf.write(path, os.path.relpath(path, source_dir))
                count += 1
    except OSError as e:
        raise WriteError(f"Failed to write archive {archive_path}") from e

    logger.info("아카이브 생성: %s (%d files)", archive_path, count)
    return count
