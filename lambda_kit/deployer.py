"""
deployer
--------

원격 함수 존재 여부와 설정 일치 여부에 따라
생성 / 업데이트 / 거부를 결정한다.

    START -> CHECK_EXISTENCE -> CREATE                      -> DONE
                             -> VERIFY_CONFIG -> CODE_UPDATE -> DONE
                                              -> REJECTED (설정 불일치)

설정 불일치는 update_config 옵션이 없으면 배포를 막는다.
코드만 배포하면서 원격 설정 drift 를 조용히 덮어쓰지 않기 위함이다.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import List, Optional

from .archive import read_archive
from .code_update import update_function_code
from .comparison import config_differences
from .config import ERR_LAMBDA_CONFIG, ERR_LAMBDA_NOT_FOUND, INFO_DEPLOY_COMPLETE
from .documents import FunctionConfig, Secrets
from .errors import LambdaConfigMismatchError, LambdaNotFoundError, RemoteNotFoundError
from .lambda_client import LambdaClient, RemoteFunctionInfo
from .logging_utils import get_logger


logger = get_logger(__name__)


@dataclass(frozen=True)
class DeployOptions:
    create: bool = False
    update_config: bool = False


async def check_lambda(client: LambdaClient, cfg: FunctionConfig,
                       options: DeployOptions) -> Optional[RemoteFunctionInfo]:
    """
    원격 함수 스냅샷을 돌려준다.
    함수가 없고 create 옵션이 있으면 None, 옵션이 없으면 LambdaNotFoundError.
    """
    try:
        return await asyncio.to_thread(client.get_function, cfg.function_name)
    except RemoteNotFoundError:
        if options.create:
            logger.info("원격 함수가 없어 새로 생성합니다: %s", cfg.function_name)
            return None
        raise LambdaNotFoundError(ERR_LAMBDA_NOT_FOUND) from None


def create_function(client: LambdaClient, cfg: FunctionConfig, secrets: Secrets, base_dir: str = ".") -> str:
    zip_file = read_archive(cfg.archive_name, base_dir)
    client.create_function(cfg, secrets, zip_file)
    return f"Lambda function ({cfg.function_name}) created"


async def run_deploy(client: LambdaClient, cfg: FunctionConfig, secrets: Secrets,
                     options: Optional[DeployOptions] = None, base_dir: str = ".") -> str:
    options = options or DeployOptions()

    remote = await check_lambda(client, cfg, options)
    if remote is None:
        return await asyncio.to_thread(create_function, client, cfg, secrets, base_dir)

    if not options.update_config:
        diffs = config_differences(remote, cfg, secrets)
        if diffs:
            logger.warning("원격 설정과 다릅니다: %s", ", ".join(diffs))
            raise LambdaConfigMismatchError(ERR_LAMBDA_CONFIG, diffs)

    zip_file = await asyncio.to_thread(read_archive, cfg.archive_name, base_dir)

    pending: List = []
    if options.update_config:
        pending.append(asyncio.to_thread(client.update_function_configuration, cfg, secrets))
    pending.append(asyncio.to_thread(update_function_code, client, cfg, remote, zip_file))

    results = await asyncio.gather(*pending)
    logger.info("배포 결과: %s", results[-1])
    return INFO_DEPLOY_COMPLETE
