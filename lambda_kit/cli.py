import os
import sys
from typing import Optional

import click

from .archive import build_archive
from .config import ToolSettings, load_env_files
from .deployer import DeployOptions
from .documents import FunctionConfig
from .errors import LambdaKitError
from .logging_utils import setup_logging, get_logger
from .object_store import read_document
from . import orchestrator


logger = get_logger(__name__)


@click.group()
@click.option(
    "-C",
    "--chdir",
    "chdir",
    type=click.Path(file_okay=False, dir_okay=True, exists=True),
    default=".",
    help="작업 디렉토리 (기본: 현재 디렉토리)",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="로그 레벨을 DEBUG로 올립니다. (-vv 는 botocore 로그까지 출력)",
)
@click.pass_context
def main(ctx: click.Context, chdir: str, verbose: int) -> None:
    """AWS Lambda 함수 하나를 배포하고 로컬에서 테스트하는 CLI"""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["chdir"] = chdir
    ctx.obj["verbose"] = verbose


def _settings_from_ctx(ctx: click.Context) -> ToolSettings:
    base_dir: str = ctx.obj["chdir"]
    load_env_files(base_dir)
    settings = ToolSettings.from_env(base_dir)
    logger.debug("Settings: %s", settings)
    return settings


def _fail(action: str, e: Exception) -> None:
    if not isinstance(e, LambdaKitError):
        logger.exception("%s 중 예상하지 못한 오류 발생", action)
    click.echo(f"[ERROR] {action} 실패: {e}", err=True)
    sys.exit(1)


@main.command()
@click.pass_context
def init(ctx: click.Context) -> None:
    """
    lambda-config.json / lambda-secrets.json / lambda-tests.json 이 없으면 기본값으로 생성.
    lambda-secrets.json 은 자격증명을 담으므로 버전 관리에서 제외하세요.
    """
    settings = _settings_from_ctx(ctx)
    try:
        messages = orchestrator.init(settings)
    except Exception as e:  # noqa: BLE001
        _fail("초기화", e)
        return

    for message in messages:
        click.echo(message)


@main.command(name="deploy")
@click.option("--create", is_flag=True, help="함수가 없으면 새로 생성합니다.")
@click.option(
    "--update-config",
    "update_config",
    is_flag=True,
    help="원격 설정이 달라도 로컬 설정으로 덮어씁니다.",
)
@click.pass_context
def deploy(ctx: click.Context, create: bool, update_config: bool) -> None:
    """함수 코드/설정을 실제로 생성 또는 업데이트"""
    settings = _settings_from_ctx(ctx)
    options = DeployOptions(create=create, update_config=update_config)
    try:
        result = orchestrator.deploy(options, settings)
    except Exception as e:  # noqa: BLE001
        _fail("배포", e)
        return

    click.echo(result)


@main.command(name="test")
@click.argument("test_file", required=False)
@click.pass_context
def test_cmd(ctx: click.Context, test_file: Optional[str]) -> None:
    """lambda-tests.json (또는 TEST_FILE) 의 이벤트로 로컬 핸들러를 호출"""
    settings = _settings_from_ctx(ctx)
    try:
        results = orchestrator.test(test_file, settings)
    except Exception as e:  # noqa: BLE001
        _fail("테스트", e)
        return

    total = sum(len(r) for r in results)
    click.echo(f"{total} invocation(s) in {len(results)} test case(s) passed")
    if ctx.obj["verbose"]:
        for i, case_results in enumerate(results):
            for j, value in enumerate(case_results):
                click.echo(f"- case {i} event {j}: {value!r}")


@main.command()
@click.pass_context
def check(ctx: click.Context) -> None:
    """
    원격 함수 설정과 로컬 설정을 비교만 한다.
    (실제 리소스 생성/변경은 하지 않는다)
    """
    settings = _settings_from_ctx(ctx)
    try:
        report, has_issues = orchestrator.check(settings)
    except Exception as e:  # noqa: BLE001
        _fail("체크", e)
        return

    click.echo(report)

    # 함수가 없거나 설정이 다르면 exit 1 로 종료하여 CI 등에서 감지 가능하게 한다.
    if has_issues:
        sys.exit(1)


@main.command()
@click.argument(
    "source_dir",
    type=click.Path(file_okay=False, dir_okay=True, exists=True),
)
@click.option(
    "-o",
    "--output",
    "output",
    default="",
    help="아카이브 경로 (기본: lambda-config.json 의 archiveName)",
)
@click.pass_context
def package(ctx: click.Context, source_dir: str, output: str) -> None:
    """SOURCE_DIR 를 배포용 zip 아카이브로 묶는다"""
    settings = _settings_from_ctx(ctx)
    try:
        if not output:
            cfg = FunctionConfig.from_document(read_document(settings.config_path))
            output = cfg.archive_name
        if not output:
            raise LambdaKitError("archiveName 이 비어 있습니다. --output 을 지정하세요.")
        archive_path = settings.path(output)
        count = build_archive(source_dir, archive_path)
    except Exception as e:  # noqa: BLE001
        _fail("패키징", e)
        return

    click.echo(f"{os.path.relpath(archive_path)} ({count} files)")
