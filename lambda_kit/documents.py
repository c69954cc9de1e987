"""
documents
---------

lambda-config.json / lambda-secrets.json / lambda-tests.json 의
타입 정의와 검증된 생성 함수.

각 from_document() 는 파싱된 JSON 값을 받아 불변 dataclass 를 돌려주거나
ValidationError 를 던진다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .config import (
    DEFAULT_MEMORY_SIZE,
    DEFAULT_RUNTIME,
    DEFAULT_TIMEOUT,
    ERR_INVALID_CONFIG,
    ERR_INVALID_SECRETS,
    ERR_INVALID_TESTS,
    FILE_LAMBDA_CONFIG,
    FILE_LAMBDA_SECRETS,
    FILE_LAMBDA_TESTS,
    SUPPORTED_RUNTIMES,
)
from .errors import ValidationError


CONFIG_KEYS = (
    "archiveName",
    "FunctionName",
    "Description",
    "Handler",
    "Publish",
    "Runtime",
    "MemorySize",
    "Timeout",
)
SECRETS_KEYS = (
    "region",
    "profile",
    "accessKeyId",
    "secretAccessKey",
    "Role",
    "Environment",
)
TEST_CASE_KEYS = ("context", "events")


def _has_keys(obj: Any, keys: Tuple[str, ...]) -> bool:
    return isinstance(obj, dict) and all(k in obj for k in keys)


def is_config_shape(obj: Any) -> bool:
    return _has_keys(obj, CONFIG_KEYS)


def is_secrets_shape(obj: Any) -> bool:
    return _has_keys(obj, SECRETS_KEYS)


def is_tests_shape(obj: Any) -> bool:
    return isinstance(obj, list) and all(_has_keys(item, TEST_CASE_KEYS) for item in obj)


_SHAPE_CHECKS = {
    FILE_LAMBDA_CONFIG: (is_config_shape, "Invalid lambda config"),
    FILE_LAMBDA_SECRETS: (is_secrets_shape, "Invalid lambda secrets"),
    FILE_LAMBDA_TESTS: (is_tests_shape, "Invalid lambda tests"),
}


def check_document(obj: Any, check_type: str) -> None:
    """
    check_type(문서 종류) 에 맞는 구조인지 확인한다.
    맞지 않으면 문서 종류별 메시지로 ValidationError 를 던진다.
    """
    entry = _SHAPE_CHECKS.get(check_type)
    if entry is None:
        raise ValidationError(f"Invalid check type {check_type}")
    predicate, message = entry
    if not predicate(obj):
        raise ValidationError(message)


def default_document(kind: str) -> Any:
    """init 시 새로 쓰는 기본 문서. 호출마다 새 객체를 만든다."""
    if kind == FILE_LAMBDA_CONFIG:
        return {
            "archiveName": "",
            "FunctionName": "",
            "Description": "",
            "Handler": "",
            "Publish": False,
            "Runtime": DEFAULT_RUNTIME,
            "MemorySize": DEFAULT_MEMORY_SIZE,
            "Timeout": DEFAULT_TIMEOUT,
        }
    if kind == FILE_LAMBDA_SECRETS:
        return {
            "region": "",
            "profile": "",
            "accessKeyId": "",
            "secretAccessKey": "",
            "Role": "",
            "Environment": {"Variables": {}},
        }
    if kind == FILE_LAMBDA_TESTS:
        return [{"context": {}, "events": []}]
    raise ValidationError(f"Unable to create object for {kind}")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class FunctionConfig:
    archive_name: str
    function_name: str
    description: str
    handler: str
    publish: bool
    runtime: str
    memory_size: int
    timeout: int

    @classmethod
    def from_document(cls, obj: Any) -> "FunctionConfig":
        if not is_config_shape(obj):
            raise ValidationError(ERR_INVALID_CONFIG)

        for key in ("archiveName", "FunctionName", "Description", "Handler"):
            if not isinstance(obj[key], str):
                raise ValidationError(f"{ERR_INVALID_CONFIG}: {key} must be a string")
        if not isinstance(obj["Publish"], bool):
            raise ValidationError(f"{ERR_INVALID_CONFIG}: Publish must be a boolean")
        if obj["Runtime"] not in SUPPORTED_RUNTIMES:
            raise ValidationError(
                f"{ERR_INVALID_CONFIG}: Runtime must be one of {', '.join(SUPPORTED_RUNTIMES)}"
            )
        for key in ("MemorySize", "Timeout"):
            if not _is_int(obj[key]):
                raise ValidationError(f"{ERR_INVALID_CONFIG}: {key} must be an integer")

        return cls(
            archive_name=obj["archiveName"],
            function_name=obj["FunctionName"],
            description=obj["Description"],
            handler=obj["Handler"],
            publish=obj["Publish"],
            runtime=obj["Runtime"],
            memory_size=obj["MemorySize"],
            timeout=obj["Timeout"],
        )

    def require_deployable(self) -> "FunctionConfig":
        if not self.function_name or not self.handler:
            raise ValidationError(ERR_INVALID_CONFIG)
        return self


@dataclass(frozen=True)
class Secrets:
    region: str
    role: str
    profile: str = ""
    access_key_id: str = field(default="", repr=False)
    secret_access_key: str = field(default="", repr=False)
    variables: Mapping[str, str] = field(default_factory=dict, repr=False)

    @classmethod
    def from_document(cls, obj: Any) -> "Secrets":
        if not is_secrets_shape(obj):
            raise ValidationError(ERR_INVALID_SECRETS)

        for key in ("region", "profile", "accessKeyId", "secretAccessKey", "Role"):
            if not isinstance(obj[key], str):
                raise ValidationError(f"{ERR_INVALID_SECRETS}: {key} must be a string")

        env = obj["Environment"]
        variables: Dict[str, str] = {}
        if env is not None:
            if not isinstance(env, dict):
                raise ValidationError(f"{ERR_INVALID_SECRETS}: Environment must be an object")
            raw_vars = env.get("Variables") or {}
            if not isinstance(raw_vars, dict) or not all(
                isinstance(k, str) and isinstance(v, str) for k, v in raw_vars.items()
            ):
                raise ValidationError(
                    f"{ERR_INVALID_SECRETS}: Environment.Variables must map strings to strings"
                )
            variables = dict(raw_vars)

        return cls(
            region=obj["region"],
            role=obj["Role"],
            profile=obj["profile"],
            access_key_id=obj["accessKeyId"],
            secret_access_key=obj["secretAccessKey"],
            variables=variables,
        )

    def require_deployable(self) -> "Secrets":
        if not self.region or not self.role:
            raise ValidationError(ERR_INVALID_SECRETS)
        return self

    @property
    def environment(self) -> Dict[str, Dict[str, str]]:
        """Lambda API 가 받는 Environment 형태."""
        return {"Variables": dict(self.variables)}


@dataclass(frozen=True)
class TestCase:
    __test__ = False  # pytest 수집 대상 아님

    context: Any
    events: List[Any]
    name: Optional[str] = None

    @classmethod
    def from_document(cls, obj: Any) -> "TestCase":
        if not _has_keys(obj, TEST_CASE_KEYS) or not isinstance(obj["events"], list):
            raise ValidationError(ERR_INVALID_TESTS)
        name = obj.get("name")
        if name is not None and not isinstance(name, str):
            raise ValidationError(f"{ERR_INVALID_TESTS}: name must be a string")
        return cls(context=obj["context"], events=list(obj["events"]), name=name)


def parse_tests(obj: Any) -> List[TestCase]:
    if not isinstance(obj, list):
        raise ValidationError(ERR_INVALID_TESTS)
    return [TestCase.from_document(item) for item in obj]
