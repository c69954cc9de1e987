"""
lambda_kit
----------

AWS Lambda 함수 하나를 위한 배포/테스트 CLI 패키지.
lambda-config.json / lambda-secrets.json 을 원격 함수 설정과 비교하여
함수를 생성하거나 코드/설정을 업데이트하고,
lambda-tests.json 의 fixture 로 핸들러를 로컬에서 실행한다.
"""

__all__ = [
    "config",
    "orchestrator",
]
