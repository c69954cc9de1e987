"""
errors
------

lambda_kit 전체에서 사용하는 예외 계층.
CLI 는 LambdaKitError 를 잡아 메시지를 출력하고 종료 코드를 결정한다.
"""

from __future__ import annotations

from typing import Any, List, Optional


class LambdaKitError(Exception):
    """lambda_kit 예외의 공통 부모."""


class MissingFileError(LambdaKitError):
    """파일이 없거나 읽을 수 없음."""


class InvalidJSONError(LambdaKitError):
    """JSON 파싱 실패."""


class ValidationError(LambdaKitError):
    """문서 구조 또는 필수 값 검증 실패."""


class WriteError(LambdaKitError):
    """파일 쓰기 실패."""


class LambdaNotFoundError(LambdaKitError):
    """원격 함수가 없고 생성 옵션도 주어지지 않음."""


class LambdaConfigMismatchError(LambdaKitError):
    """로컬 설정과 원격 함수 설정이 다름."""

    def __init__(self, message: str, differences: Optional[List[str]] = None) -> None:
        self.differences = list(differences or [])
        if self.differences:
            message = f"{message}: {', '.join(self.differences)}"
        super().__init__(message)


class RemoteCallError(LambdaKitError):
    """Lambda API 호출 실패."""


class RemoteNotFoundError(RemoteCallError):
    """Lambda API 가 ResourceNotFoundException 을 반환."""


class InvalidHandlerError(LambdaKitError):
    """Handler 문자열이 잘못되었거나 핸들러를 불러올 수 없음."""


class InvocationError(LambdaKitError):
    """로컬 테스트 중 핸들러가 예외를 던짐."""

    def __init__(self, error: BaseException, test_name: Optional[str] = None,
                 event_index: Optional[int] = None) -> None:
        self.error: Any = error
        self.test_name = test_name
        self.event_index = event_index
        where = test_name or "(unnamed)"
        super().__init__(f"Handler failed in test {where} event #{event_index}: {error}")
