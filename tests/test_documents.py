import pytest

from lambda_kit.config import FILE_LAMBDA_CONFIG, FILE_LAMBDA_SECRETS, FILE_LAMBDA_TESTS
from lambda_kit.documents import (
    FunctionConfig,
    Secrets,
    check_document,
    default_document,
    parse_tests,
)
from lambda_kit.errors import ValidationError

from conftest import config_doc, secrets_doc


def test_config_from_document() -> None:
    cfg = FunctionConfig.from_document(config_doc(MemorySize=256))

    assert cfg.function_name == "orders-api"
    assert cfg.handler == "index.handler"
    assert cfg.memory_size == 256


def test_config_rejects_unknown_runtime() -> None:
    with pytest.raises(ValidationError) as excinfo:
        FunctionConfig.from_document(config_doc(Runtime="nodejs6.10"))

    assert "Runtime" in str(excinfo.value)


def test_config_missing_key_is_invalid() -> None:
    doc = config_doc()
    del doc["Timeout"]

    with pytest.raises(ValidationError):
        FunctionConfig.from_document(doc)


def test_require_deployable_needs_name_and_handler() -> None:
    cfg = FunctionConfig.from_document(config_doc(Handler=""))

    with pytest.raises(ValidationError):
        cfg.require_deployable()


def test_secrets_require_region_and_role() -> None:
    with pytest.raises(ValidationError):
        Secrets.from_document(secrets_doc(Role="")).require_deployable()


def test_secrets_repr_hides_credentials() -> None:
    secrets = Secrets.from_document(
        secrets_doc(accessKeyId="AKIAEXAMPLE", secretAccessKey="s3cr3t")
    )

    text = repr(secrets)
    assert "AKIAEXAMPLE" not in text
    assert "s3cr3t" not in text
    assert "dev" not in text


def test_secrets_environment_shape() -> None:
    secrets = Secrets.from_document(secrets_doc(Environment={}))

    assert secrets.environment == {"Variables": {}}


def test_defaults_parse_back_into_their_validators() -> None:
    check_document(default_document(FILE_LAMBDA_CONFIG), FILE_LAMBDA_CONFIG)
    check_document(default_document(FILE_LAMBDA_SECRETS), FILE_LAMBDA_SECRETS)
    check_document(default_document(FILE_LAMBDA_TESTS), FILE_LAMBDA_TESTS)

    FunctionConfig.from_document(default_document(FILE_LAMBDA_CONFIG))
    Secrets.from_document(default_document(FILE_LAMBDA_SECRETS))
    assert len(parse_tests(default_document(FILE_LAMBDA_TESTS))) == 1


@pytest.mark.parametrize(
    "kind, obj, message",
    [
        (FILE_LAMBDA_CONFIG, {"FunctionName": "x"}, "Invalid lambda config"),
        (FILE_LAMBDA_SECRETS, [], "Invalid lambda secrets"),
        (FILE_LAMBDA_TESTS, [{"context": {}}], "Invalid lambda tests"),
        ("unknown.json", {}, "Invalid check type unknown.json"),
    ],
)
def test_check_document_messages(kind, obj, message) -> None:
    with pytest.raises(ValidationError) as excinfo:
        check_document(obj, kind)

    assert str(excinfo.value) == message


def test_parse_tests_keeps_order_and_name() -> None:
    tests = parse_tests([
        {"name": "first", "context": {}, "events": [{"n": 1}, {"n": 2}]},
        {"context": None, "events": []},
    ])

    assert tests[0].name == "first"
    assert tests[0].events == [{"n": 1}, {"n": 2}]
    assert tests[1].name is None
