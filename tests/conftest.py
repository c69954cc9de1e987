"""
pytest 설정:

로컬 작업 환경에 설치된 다른 버전의 lambda_kit 패키지가 존재할 때,
`pytest` 실행 시 site-packages 쪽이 먼저 import 되어 테스트가 깨질 수 있다.

테스트는 항상 현재 레포의 소스를 대상으로 해야 하므로, repo root 를 sys.path 최상단에 고정한다.
"""

from __future__ import annotations

import json
import os
import sys
from typing import Any, Dict

import pytest


def pytest_configure() -> None:
    repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    if repo_root not in sys.path:
        sys.path.insert(0, repo_root)


def config_doc(**overrides: Any) -> Dict[str, Any]:
    doc = {
        "archiveName": "function.zip",
        "FunctionName": "orders-api",
        "Description": "orders handler",
        "Handler": "index.handler",
        "Publish": False,
        "Runtime": "python3.12",
        "MemorySize": 128,
        "Timeout": 3,
    }
    doc.update(overrides)
    return doc


def secrets_doc(**overrides: Any) -> Dict[str, Any]:
    doc = {
        "region": "us-east-1",
        "profile": "",
        "accessKeyId": "",
        "secretAccessKey": "",
        "Role": "arn:aws:iam::123456789012:role/lambda-role",
        "Environment": {"Variables": {"STAGE": "dev"}},
    }
    doc.update(overrides)
    return doc


def write_json(path: Any, obj: Any) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(obj, f)


@pytest.fixture
def workspace(tmp_path, monkeypatch: pytest.MonkeyPatch):
    """lambda-config.json / lambda-secrets.json / function.zip 이 있는 작업 디렉토리"""
    for name in ("LAMBDA_CONFIG_FILE", "LAMBDA_SECRETS_FILE", "LAMBDA_TESTS_FILE"):
        monkeypatch.delenv(name, raising=False)
    write_json(tmp_path / "lambda-config.json", config_doc())
    write_json(tmp_path / "lambda-secrets.json", secrets_doc())
    (tmp_path / "function.zip").write_bytes(b"PK-fake-archive")
    return tmp_path
