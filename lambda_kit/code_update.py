"""
code_update
-----------

dry-run 으로 결과 CodeSha256 을 먼저 확인하고,
원격 코드와 다를 때만 실제 업데이트를 수행한다.
(Publish=true 일 때 변경 없는 새 버전이 생기는 것을 막는다.)
"""

from __future__ import annotations

from typing import Optional

from .config import INFO_FUNCTION_CODE_UP_TO_DATE, INFO_FUNCTION_CODE_UPDATED
from .documents import FunctionConfig
from .errors import RemoteCallError
from .lambda_client import LambdaClient, RemoteFunctionInfo
from .logging_utils import get_logger


logger = get_logger(__name__)


def update_function_code(client: LambdaClient, cfg: FunctionConfig,
                         remote: Optional[RemoteFunctionInfo], zip_file: bytes) -> str:
    if remote is None or not remote.code_sha256:
        raise RemoteCallError("Invalid Lambda function information")

    preview = client.update_function_code(
        cfg.function_name, zip_file, publish=cfg.publish, dry_run=True,
    )

    if preview.code_sha256 == remote.code_sha256:
        logger.info("코드 변경 없음: %s (sha256=%s)", cfg.function_name, remote.code_sha256)
        return INFO_FUNCTION_CODE_UP_TO_DATE

    logger.info(
        "코드 변경 감지: %s -> %s", remote.code_sha256, preview.code_sha256,
    )
    result = client.update_function_code(
        cfg.function_name, zip_file, publish=cfg.publish, dry_run=False,
    )
    logger.info("코드 업데이트 완료: version=%s", result.version or "$LATEST")
    return INFO_FUNCTION_CODE_UPDATED
