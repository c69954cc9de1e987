"""
harness
-------

로컬 테스트 하네스.

Handler("module.export") 를 현재 디렉토리의 module.py 에서 불러와
테스트 케이스의 (context, event) 조합마다 한 번씩 호출한다.
모든 호출은 동시에 실행되며, 하나라도 실패하면 첫 실패를 그대로 올린다.
"""

from __future__ import annotations

import asyncio
import importlib.util
import inspect
import os
import sys
import time
import uuid
from typing import Any, Callable, List, Optional, Tuple

from .documents import FunctionConfig, TestCase
from .errors import InvalidHandlerError, InvocationError
from .logging_utils import get_logger


logger = get_logger(__name__)

Handler = Callable[[Any, Any], Any]


def parse_handler(handler: str) -> Tuple[str, str]:
    parts = handler.split(".")
    if len(parts) != 2 or not all(parts):
        raise InvalidHandlerError(f"Invalid handler {handler!r} (expected module.function)")
    return parts[0], parts[1]


def load_handler(directory: str, module_name: str, export_name: str) -> Handler:
    path = os.path.join(os.path.abspath(directory), module_name + ".py")
    if not os.path.isfile(path):
        raise InvalidHandlerError(f"Handler module not found: {path}")

    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise InvalidHandlerError(f"Unable to load handler module {path}")
    module = importlib.util.module_from_spec(spec)

    # 핸들러 모듈이 같은 디렉토리의 다른 모듈을 import 할 수 있어야 한다.
    # sys.path 항목은 모듈 실행 동안만 유지한다.
    module_dir = os.path.dirname(path)
    added_path = module_dir not in sys.path
    if added_path:
        sys.path.insert(0, module_dir)
    # dataclass, pickle 등은 sys.modules 에서 모듈을 찾으므로 실행 전에 등록한다.
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as e:  # noqa: BLE001
        sys.modules.pop(module_name, None)
        raise InvalidHandlerError(f"Failed to import handler module {path}: {e}") from e
    finally:
        if added_path and module_dir in sys.path:
            sys.path.remove(module_dir)

    handler = getattr(module, export_name, None)
    if handler is None or not callable(handler):
        raise InvalidHandlerError(f"invalid handler object {module_name}.{export_name}")
    logger.debug("핸들러 로드: %s.%s (%s)", module_name, export_name, path)
    return handler


_RESERVED_ATTRIBUTES = {"fixture", "get_remaining_time_in_millis"}


def _is_attribute_name(key: Any) -> bool:
    return (
        isinstance(key, str)
        and key.isidentifier()
        and not key.startswith("_")
        and key not in _RESERVED_ATTRIBUTES
    )


class LambdaContext:
    """
    테스트 fixture 의 context 를 Lambda context 객체처럼 노출한다.

    fixture 의 키는 속성으로 읽을 수 있고, 표준 속성은 FunctionConfig 에서 기본값을 채운다.
    """

    def __init__(self, fixture: Any, cfg: Optional[FunctionConfig] = None) -> None:
        self.fixture = fixture
        self.function_name = cfg.function_name if cfg else ""
        self.function_version = "$LATEST"
        self.invoked_function_arn = ""
        self.memory_limit_in_mb = cfg.memory_size if cfg else 128
        self.aws_request_id = str(uuid.uuid4())
        self.log_group_name = f"/aws/lambda/{self.function_name}"
        self.log_stream_name = "local"
        self._deadline = time.monotonic() + (cfg.timeout if cfg else 3)
        if isinstance(fixture, dict):
            for key, value in fixture.items():
                if _is_attribute_name(key):
                    setattr(self, key, value)

    def get_remaining_time_in_millis(self) -> int:
        return max(0, int((self._deadline - time.monotonic()) * 1000))

    def __getitem__(self, key: str) -> Any:
        if not isinstance(self.fixture, dict):
            raise KeyError(key)
        return self.fixture[key]


async def _invoke(handler: Handler, event: Any, context: LambdaContext,
                  test_name: Optional[str], index: int) -> Any:
    try:
        if inspect.iscoroutinefunction(handler):
            return await handler(event, context)
        return await asyncio.to_thread(handler, event, context)
    except Exception as e:  # noqa: BLE001
        raise InvocationError(e, test_name=test_name, event_index=index) from e


async def _run_case(handler: Handler, case: TestCase, cfg: Optional[FunctionConfig]) -> List[Any]:
    return list(await asyncio.gather(*(
        _invoke(handler, event, LambdaContext(case.context, cfg), case.name, i)
        for i, event in enumerate(case.events)
    )))


async def run_tests(handler: Handler, tests: List[TestCase],
                    cfg: Optional[FunctionConfig] = None) -> List[List[Any]]:
    logger.info(
        "로컬 테스트 실행: %d cases, %d events",
        len(tests), sum(len(t.events) for t in tests),
    )
    return list(await asyncio.gather(*(_run_case(handler, case, cfg) for case in tests)))
