from dataclasses import replace

import pytest

from lambda_kit.comparison import config_differences, config_matches, environments_equal
from lambda_kit.documents import FunctionConfig, Secrets
from lambda_kit.lambda_client import RemoteFunctionInfo

from conftest import config_doc, secrets_doc


ENVIRONMENTS = [
    None,
    {},
    {"Variables": {}},
    {"Variables": None},
    {"Variables": {"X": "1"}},
    {"Variables": {"X": "2"}},
    {"Variables": {"X": "1", "Y": "2"}},
    {"Variables": {"Y": "2", "X": "1"}},
]


@pytest.mark.parametrize("a", ENVIRONMENTS)
@pytest.mark.parametrize("b", ENVIRONMENTS)
def test_environment_equality_is_symmetric(a, b) -> None:
    assert environments_equal(a, b) == environments_equal(b, a)


@pytest.mark.parametrize("a", ENVIRONMENTS)
def test_environment_equality_is_reflexive(a) -> None:
    assert environments_equal(a, a)


@pytest.mark.parametrize(
    "a, b, expected",
    [
        ({}, {"Variables": {}}, True),
        ({"Variables": {"X": "1"}}, {"Variables": {}}, False),
        ({"Variables": {"X": "1"}}, {"Variables": {"X": "1"}}, True),
        ({"Variables": {"X": "1"}}, {"Variables": {"X": "2"}}, False),
        ({"Variables": {"X": "1", "Y": "2"}}, {"Variables": {"Y": "2"}}, False),
        ({"Variables": {"X": "1", "Y": "2"}}, {"Variables": {"Y": "2", "X": "1"}}, True),
    ],
)
def test_environment_equality_cases(a, b, expected) -> None:
    assert environments_equal(a, b) is expected


def _remote(**overrides) -> RemoteFunctionInfo:
    remote = RemoteFunctionInfo(
        function_name="orders-api",
        description="orders handler",
        handler="index.handler",
        runtime="python3.12",
        memory_size=128,
        timeout=3,
        role="arn:aws:iam::123456789012:role/lambda-role",
        environment={"Variables": {"STAGE": "dev"}},
        code_sha256="abc",
    )
    return replace(remote, **overrides)


def test_matching_config() -> None:
    cfg = FunctionConfig.from_document(config_doc())
    secrets = Secrets.from_document(secrets_doc())

    assert config_matches(_remote(), cfg, secrets)


def test_timeout_difference_is_reported() -> None:
    cfg = FunctionConfig.from_document(config_doc())
    secrets = Secrets.from_document(secrets_doc())

    assert config_differences(_remote(timeout=30), cfg, secrets) == ["Timeout"]


def test_role_and_environment_come_from_secrets() -> None:
    cfg = FunctionConfig.from_document(config_doc())
    secrets = Secrets.from_document(
        secrets_doc(Role="arn:aws:iam::123456789012:role/other", Environment={"Variables": {}})
    )

    assert config_differences(_remote(), cfg, secrets) == ["Role", "Environment"]


def test_remote_without_environment_matches_empty_local() -> None:
    cfg = FunctionConfig.from_document(config_doc())
    secrets = Secrets.from_document(secrets_doc(Environment={"Variables": {}}))

    assert config_matches(_remote(environment=None), cfg, secrets)
