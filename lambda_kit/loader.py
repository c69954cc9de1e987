"""
loader
------

세 종류의 로컬 문서를 읽고 검증한다.
init 단계에서는 없는 문서를 기본값으로 생성한다.
"""

from __future__ import annotations

import asyncio
from typing import List, Tuple

from .config import FILE_LAMBDA_CONFIG, FILE_LAMBDA_SECRETS, FILE_LAMBDA_TESTS, ToolSettings
from .documents import FunctionConfig, Secrets, TestCase, default_document, parse_tests
from .errors import LambdaKitError
from .logging_utils import get_logger
from .object_store import read_document, write_document


logger = get_logger(__name__)


def load_or_init(path: str, kind: str) -> str:
    """
    path 의 문서를 kind 구조로 읽어 본다.
    읽기/검증이 어떤 이유로든 실패하면 기본 문서를 써서 그 결과 메시지를 돌려준다.
    """
    try:
        read_document(path, kind)
    except LambdaKitError as e:
        logger.info("기본 문서를 생성합니다: %s (%s)", path, e)
        return write_document(path, default_document(kind))
    return f"File {path} already exists"


async def init_documents(settings: ToolSettings) -> List[str]:
    pairs = [
        (settings.config_path, FILE_LAMBDA_CONFIG),
        (settings.secrets_path, FILE_LAMBDA_SECRETS),
        (settings.tests_path, FILE_LAMBDA_TESTS),
    ]
    return list(await asyncio.gather(*(asyncio.to_thread(load_or_init, p, k) for p, k in pairs)))


def read_function_config(path: str) -> FunctionConfig:
    obj = read_document(path, FILE_LAMBDA_CONFIG)
    return FunctionConfig.from_document(obj).require_deployable()


def read_secrets(path: str) -> Secrets:
    obj = read_document(path, FILE_LAMBDA_SECRETS)
    return Secrets.from_document(obj).require_deployable()


def read_tests(path: str) -> List[TestCase]:
    obj = read_document(path, FILE_LAMBDA_TESTS)
    return parse_tests(obj)


async def load_config(settings: ToolSettings) -> Tuple[FunctionConfig, Secrets]:
    """설정과 secrets 를 동시에 읽는다. 하나라도 실패하면 전체 실패."""
    cfg, secrets = await asyncio.gather(
        asyncio.to_thread(read_function_config, settings.config_path),
        asyncio.to_thread(read_secrets, settings.secrets_path),
    )
    logger.debug("Config loaded: %s", cfg)
    return cfg, secrets


async def load_test_inputs(settings: ToolSettings, tests_path: str) -> Tuple[FunctionConfig, List[TestCase]]:
    cfg, tests = await asyncio.gather(
        asyncio.to_thread(read_function_config, settings.config_path),
        asyncio.to_thread(read_tests, tests_path),
    )
    logger.debug("테스트 케이스 %d개 로드: %s", len(tests), tests_path)
    return cfg, tests
