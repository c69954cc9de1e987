"""
lambda_client
-------------

boto3 Lambda 클라이언트를 얇게 감싼다.
파라미터 구성 외의 로컬 검증은 하지 않는다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .config import AWS_LAMBDA_API_VERSION
from .documents import FunctionConfig, Secrets
from .errors import RemoteCallError, RemoteNotFoundError
from .logging_utils import get_logger


logger = get_logger(__name__)


@dataclass(frozen=True)
class RemoteFunctionInfo:
    """get_function 응답의 Configuration 스냅샷."""

    function_name: str
    description: str = ""
    handler: str = ""
    runtime: str = ""
    memory_size: Optional[int] = None
    timeout: Optional[int] = None
    role: str = ""
    environment: Optional[Dict[str, Any]] = field(default=None, repr=False)
    code_sha256: str = ""
    version: str = ""
    last_modified: str = ""

    @classmethod
    def from_configuration(cls, conf: Dict[str, Any]) -> "RemoteFunctionInfo":
        return cls(
            function_name=conf.get("FunctionName", ""),
            description=conf.get("Description", ""),
            handler=conf.get("Handler", ""),
            runtime=conf.get("Runtime", ""),
            memory_size=conf.get("MemorySize"),
            timeout=conf.get("Timeout"),
            role=conf.get("Role", ""),
            environment=conf.get("Environment"),
            code_sha256=conf.get("CodeSha256", ""),
            version=conf.get("Version", ""),
            last_modified=conf.get("LastModified", ""),
        )


@dataclass(frozen=True)
class CodeUpdateResult:
    code_sha256: str
    version: str = ""
    last_modified: str = ""


def _error_code(e: ClientError) -> str:
    return e.response.get("Error", {}).get("Code", "")


def create_session(secrets: Secrets) -> boto3.session.Session:
    """
    인증 우선순위:
    1. profile 이 비어 있지 않으면 해당 named profile
    2. accessKeyId / secretAccessKey 가 모두 있으면 명시적 키
    3. 그 외에는 boto3 기본 자격증명 체인
    """
    if secrets.profile:
        logger.debug("AWS 인증: profile=%s", secrets.profile)
        return boto3.session.Session(profile_name=secrets.profile, region_name=secrets.region)
    if secrets.access_key_id and secrets.secret_access_key:
        logger.debug("AWS 인증: 명시적 access key")
        return boto3.session.Session(
            aws_access_key_id=secrets.access_key_id,
            aws_secret_access_key=secrets.secret_access_key,
            region_name=secrets.region,
        )
    logger.debug("AWS 인증: 기본 자격증명 체인")
    return boto3.session.Session(region_name=secrets.region)


class LambdaClient:
    def __init__(self, client: Any) -> None:
        self._client = client

    @classmethod
    def from_secrets(cls, secrets: Secrets) -> "LambdaClient":
        try:
            session = create_session(secrets)
            client = session.client("lambda", api_version=AWS_LAMBDA_API_VERSION)
        except BotoCoreError as e:
            raise RemoteCallError(f"Unable to create Lambda client: {e}") from e
        return cls(client)

    def get_function(self, function_name: str) -> RemoteFunctionInfo:
        logger.info("Lambda 함수 조회: %s", function_name)
        try:
            resp = self._client.get_function(FunctionName=function_name)
        except ClientError as e:
            if _error_code(e) == "ResourceNotFoundException":
                raise RemoteNotFoundError(f"Lambda function {function_name} does not exist") from e
            raise RemoteCallError("Lambda getFunction Error") from e
        except BotoCoreError as e:
            raise RemoteCallError("Lambda getFunction Error") from e
        return RemoteFunctionInfo.from_configuration(resp.get("Configuration") or {})

    def create_function(self, cfg: FunctionConfig, secrets: Secrets, zip_file: bytes) -> Dict[str, Any]:
        logger.info("Lambda 함수 생성: %s (runtime=%s)", cfg.function_name, cfg.runtime)
        try:
            return self._client.create_function(
                FunctionName=cfg.function_name,
                Description=cfg.description,
                Handler=cfg.handler,
                Runtime=cfg.runtime,
                MemorySize=cfg.memory_size,
                Timeout=cfg.timeout,
                Publish=cfg.publish,
                Role=secrets.role,
                Environment=secrets.environment,
                Code={"ZipFile": zip_file},
            )
        except (ClientError, BotoCoreError) as e:
            raise RemoteCallError("Error creating Lambda function") from e

    def update_function_code(self, function_name: str, zip_file: bytes, *,
                             publish: bool, dry_run: bool) -> CodeUpdateResult:
        logger.info("Lambda 코드 업데이트: %s (dry_run=%s, publish=%s)", function_name, dry_run, publish)
        try:
            resp = self._client.update_function_code(
                FunctionName=function_name,
                ZipFile=zip_file,
                Publish=publish,
                DryRun=dry_run,
            )
        except (ClientError, BotoCoreError) as e:
            raise RemoteCallError(f"Error updating function code: {e}") from e
        return CodeUpdateResult(
            code_sha256=resp.get("CodeSha256", ""),
            version=resp.get("Version", ""),
            last_modified=resp.get("LastModified", ""),
        )

    def update_function_configuration(self, cfg: FunctionConfig, secrets: Secrets) -> Dict[str, Any]:
        logger.info("Lambda 설정 업데이트: %s", cfg.function_name)
        try:
            return self._client.update_function_configuration(
                FunctionName=cfg.function_name,
                Description=cfg.description,
                Handler=cfg.handler,
                Runtime=cfg.runtime,
                MemorySize=cfg.memory_size,
                Timeout=cfg.timeout,
                Role=secrets.role,
                Environment=secrets.environment,
            )
        except (ClientError, BotoCoreError) as e:
            raise RemoteCallError("Error updating function configuration") from e
