"""
comparison
----------

로컬 설정(FunctionConfig + Secrets)과 원격 함수 스냅샷을 비교한다.
부분 점수는 없고, 한 필드라도 다르면 불일치다.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from .documents import FunctionConfig, Secrets
from .lambda_client import RemoteFunctionInfo


def _variables(env: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    if not env:
        return {}
    return env.get("Variables") or {}


def environment_is_empty(env: Optional[Mapping[str, Any]]) -> bool:
    """Environment 가 없거나 Variables 가 비어 있으면 빈 것으로 본다."""
    return len(_variables(env)) == 0


def environments_equal(a: Optional[Mapping[str, Any]], b: Optional[Mapping[str, Any]]) -> bool:
    if environment_is_empty(a) and environment_is_empty(b):
        return True
    if environment_is_empty(a) or environment_is_empty(b):
        return False
    return dict(_variables(a)) == dict(_variables(b))


def config_differences(remote: RemoteFunctionInfo, cfg: FunctionConfig, secrets: Secrets) -> List[str]:
    """값이 다른 필드 이름 목록. Role 과 Environment 는 secrets 쪽 값과 비교한다."""
    pairs = [
        ("FunctionName", remote.function_name, cfg.function_name),
        ("Description", remote.description, cfg.description),
        ("Handler", remote.handler, cfg.handler),
        ("Runtime", remote.runtime, cfg.runtime),
        ("MemorySize", remote.memory_size, cfg.memory_size),
        ("Timeout", remote.timeout, cfg.timeout),
        ("Role", remote.role, secrets.role),
    ]
    diffs = [name for name, remote_value, local_value in pairs if remote_value != local_value]
    if not environments_equal(remote.environment, secrets.environment):
        diffs.append("Environment")
    return diffs


def config_matches(remote: RemoteFunctionInfo, cfg: FunctionConfig, secrets: Secrets) -> bool:
    return not config_differences(remote, cfg, secrets)
