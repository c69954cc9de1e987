from __future__ import annotations

import asyncio
from typing import Any, List, Optional, Tuple

from .comparison import config_differences
from .config import ERR_LAMBDA_NOT_FOUND, INFO_CONFIG_IN_SYNC, ToolSettings
from .deployer import DeployOptions, run_deploy
from .errors import RemoteNotFoundError
from .harness import load_handler, parse_handler, run_tests
from .lambda_client import LambdaClient
from .loader import init_documents, load_config, load_test_inputs
from .logging_utils import get_logger


logger = get_logger(__name__)


def _settings(settings: Optional[ToolSettings]) -> ToolSettings:
    return settings or ToolSettings()


def init(settings: Optional[ToolSettings] = None) -> List[str]:
    """세 문서(config/secrets/tests)가 없으면 기본값으로 생성한다."""
    return asyncio.run(init_documents(_settings(settings)))


async def deploy_async(options: Optional[DeployOptions] = None,
                       settings: Optional[ToolSettings] = None) -> str:
    settings = _settings(settings)
    cfg, secrets = await load_config(settings)
    client = LambdaClient.from_secrets(secrets)
    return await run_deploy(client, cfg, secrets, options, base_dir=settings.base_dir)


def deploy(options: Optional[DeployOptions] = None,
           settings: Optional[ToolSettings] = None) -> str:
    """
    로컬 설정으로 함수를 생성하거나 업데이트한다.

    Returns:
        결과 메시지 ("Lambda function deploy finished" 또는 생성 메시지)
    """
    return asyncio.run(deploy_async(options, settings))


async def test_async(test_file_name: Optional[str] = None,
                     settings: Optional[ToolSettings] = None) -> List[List[Any]]:
    settings = _settings(settings)
    tests_path = settings.path(test_file_name) if test_file_name else settings.tests_path

    cfg, tests = await load_test_inputs(settings, tests_path)
    module_name, export_name = parse_handler(cfg.handler)
    handler = load_handler(settings.base_dir, module_name, export_name)
    return await run_tests(handler, tests, cfg)


def test(test_file_name: Optional[str] = None,
         settings: Optional[ToolSettings] = None) -> List[List[Any]]:
    """
    로컬 핸들러를 테스트 fixture 로 호출한다. 원격 API 는 호출하지 않는다.

    Returns:
        테스트 케이스별, 이벤트별 핸들러 반환값
    """
    return asyncio.run(test_async(test_file_name, settings))


test.__test__ = False  # type: ignore[attr-defined]
test_async.__test__ = False  # type: ignore[attr-defined]


async def check_async(settings: Optional[ToolSettings] = None) -> Tuple[str, bool]:
    settings = _settings(settings)
    cfg, secrets = await load_config(settings)
    client = LambdaClient.from_secrets(secrets)

    lines: List[str] = []
    lines.append("# Lambda pre-check")
    lines.append(f"- function: {cfg.function_name}")
    lines.append(f"- region: {secrets.region}")
    lines.append("")

    try:
        remote = await asyncio.to_thread(client.get_function, cfg.function_name)
    except RemoteNotFoundError:
        lines.append(f"- 상태: {ERR_LAMBDA_NOT_FOUND} (`deploy --create` 로 생성 가능)")
        return "\n".join(lines), True

    diffs = config_differences(remote, cfg, secrets)
    lines.append("## Remote")
    lines.append(f"- version: {remote.version or '(unknown)'}")
    lines.append(f"- last_modified: {remote.last_modified or '(unknown)'}")
    lines.append(f"- code_sha256: {remote.code_sha256 or '(unknown)'}")
    lines.append("")
    lines.append("## Config")
    if diffs:
        for name in diffs:
            lines.append(f"- {name}: 다름")
        lines.append("")
        lines.append("설정을 반영하려면 `deploy --update-config` 를 실행하세요.")
    else:
        lines.append(f"- {INFO_CONFIG_IN_SYNC}")

    return "\n".join(lines), bool(diffs)


def check(settings: Optional[ToolSettings] = None) -> Tuple[str, bool]:
    """
    원격 함수를 바꾸지 않고 로컬 설정과의 차이만 점검한다.

    Returns:
        summary: 사람이 읽기 좋은 텍스트 요약
        has_issues: 함수가 없거나 설정이 다르면 True
    """
    return asyncio.run(check_async(settings))
