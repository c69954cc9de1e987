from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional

from dotenv import load_dotenv


ENV_FILES_DEFAULT_ORDER = [".env", ".env.lambda"]

# 로컬 문서 파일 이름
FILE_LAMBDA_CONFIG = "lambda-config.json"
FILE_LAMBDA_SECRETS = "lambda-secrets.json"
FILE_LAMBDA_TESTS = "lambda-tests.json"

AWS_LAMBDA_API_VERSION = "2015-03-31"

SUPPORTED_RUNTIMES = ("python3.12", "python3.13")
DEFAULT_RUNTIME = SUPPORTED_RUNTIMES[0]
DEFAULT_MEMORY_SIZE = 128
DEFAULT_TIMEOUT = 3

# 결과 메시지
INFO_FUNCTION_CODE_UP_TO_DATE = "Function code up-to-date"
INFO_FUNCTION_CODE_UPDATED = "Function code updated"
INFO_DEPLOY_COMPLETE = "Lambda function deploy finished"
INFO_CONFIG_IN_SYNC = "Lambda config up-to-date"

ERR_LAMBDA_NOT_FOUND = "Lambda not found"
ERR_LAMBDA_CONFIG = "Lambda config different"
ERR_INVALID_CONFIG = "Invalid Lambda config"
ERR_INVALID_SECRETS = "Invalid Lambda secrets"
ERR_INVALID_TESTS = "Invalid Lambda tests"


def load_env_files(base_dir: str = ".",
                   files: Optional[List[str]] = None) -> None:
    """
    주어진 디렉토리에서 .env 계열 파일을 순서대로 로드한다.
    후순위 파일이 같은 키를 덮어쓴다.
    """
    order = files or ENV_FILES_DEFAULT_ORDER
    for name in order:
        path = os.path.join(base_dir, name)
        if os.path.exists(path):
            load_dotenv(path, override=True)


@dataclass(frozen=True)
class ToolSettings:
    """
    한 번의 실행 동안 바뀌지 않는 도구 설정.

    문서 파일 경로는 base_dir 기준으로 해석된다.
    """

    base_dir: str = "."
    config_file: str = FILE_LAMBDA_CONFIG
    secrets_file: str = FILE_LAMBDA_SECRETS
    tests_file: str = FILE_LAMBDA_TESTS

    @classmethod
    def from_env(cls, base_dir: str = ".") -> "ToolSettings":
        return cls(
            base_dir=base_dir,
            config_file=os.getenv("LAMBDA_CONFIG_FILE") or FILE_LAMBDA_CONFIG,
            secrets_file=os.getenv("LAMBDA_SECRETS_FILE") or FILE_LAMBDA_SECRETS,
            tests_file=os.getenv("LAMBDA_TESTS_FILE") or FILE_LAMBDA_TESTS,
        )

    def path(self, name: str) -> str:
        if os.path.isabs(name):
            return name
        return os.path.join(self.base_dir, name)

    @property
    def config_path(self) -> str:
        return self.path(self.config_file)

    @property
    def secrets_path(self) -> str:
        return self.path(self.secrets_file)

    @property
    def tests_path(self) -> str:
        return self.path(self.tests_file)
