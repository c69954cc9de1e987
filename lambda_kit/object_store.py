"""
object_store
------------

JSON 문서를 파일에 읽고 쓰는 어댑터.
재시도 없이 한 번만 시도한다.
"""

from __future__ import annotations

import json
import os
from typing import Any, Optional

from .documents import check_document
from .errors import InvalidJSONError, MissingFileError, WriteError
from .logging_utils import get_logger


logger = get_logger(__name__)


def read_document(path: str, check_type: Optional[str] = None) -> Any:
    """
    path 의 JSON 문서를 읽는다.
    check_type 이 주어지면 해당 문서 종류의 구조인지도 확인한다.
    """
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise MissingFileError(f"Failed to read file {path}") from e

    try:
        obj = json.loads(data.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise InvalidJSONError(f"Invalid JSON in {path}: not UTF-8 encoded") from e
    except json.JSONDecodeError as e:
        raise InvalidJSONError(f"Invalid JSON in {path}: {e.msg} (line {e.lineno})") from e

    if check_type:
        check_document(obj, check_type)

    logger.debug("문서 로드: %s", path)
    return obj


def write_document(path: str, obj: Any) -> str:
    """JSON(2칸 들여쓰기) + 플랫폼 개행으로 path 에 쓴다."""
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(json.dumps(obj, indent=2) + os.linesep)
    except OSError as e:
        raise WriteError(f"Failed to write file {path}") from e

    logger.info("문서 저장: %s", path)
    return f"File {path} has been written"
