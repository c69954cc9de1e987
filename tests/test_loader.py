import asyncio
import json
import os

import pytest

from lambda_kit.config import FILE_LAMBDA_CONFIG, FILE_LAMBDA_SECRETS, FILE_LAMBDA_TESTS, ToolSettings
from lambda_kit.documents import default_document
from lambda_kit.errors import InvalidJSONError, MissingFileError, ValidationError
from lambda_kit.loader import init_documents, load_config, load_or_init
from lambda_kit.object_store import read_document, write_document

from conftest import config_doc, write_json


def test_read_missing_file(tmp_path) -> None:
    with pytest.raises(MissingFileError):
        read_document(str(tmp_path / "nope.json"))


def test_read_invalid_json(tmp_path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(InvalidJSONError):
        read_document(str(path))


def test_read_with_check_type(tmp_path) -> None:
    path = tmp_path / FILE_LAMBDA_CONFIG
    write_json(path, {"FunctionName": "x"})

    assert read_document(str(path)) == {"FunctionName": "x"}
    with pytest.raises(ValidationError):
        read_document(str(path), FILE_LAMBDA_CONFIG)


def test_write_uses_two_space_indent_and_newline(tmp_path) -> None:
    path = tmp_path / "doc.json"

    message = write_document(str(path), {"a": [1]})

    raw = path.read_bytes().decode("utf-8")
    assert raw == '{\n  "a": [\n    1\n  ]\n}' + os.linesep
    assert message == f"File {path} has been written"


def test_init_creates_all_three_documents(tmp_path) -> None:
    settings = ToolSettings(base_dir=str(tmp_path))

    messages = asyncio.run(init_documents(settings))

    assert len(messages) == 3
    for kind in (FILE_LAMBDA_CONFIG, FILE_LAMBDA_SECRETS, FILE_LAMBDA_TESTS):
        assert read_document(str(tmp_path / kind), kind) == default_document(kind)


def test_init_keeps_valid_documents(tmp_path) -> None:
    path = tmp_path / FILE_LAMBDA_CONFIG
    write_json(path, config_doc())

    message = load_or_init(str(path), FILE_LAMBDA_CONFIG)

    assert "already exists" in message
    assert json.loads(path.read_text(encoding="utf-8")) == config_doc()


def test_init_overwrites_invalid_document(tmp_path) -> None:
    path = tmp_path / FILE_LAMBDA_TESTS
    path.write_text("garbage", encoding="utf-8")

    load_or_init(str(path), FILE_LAMBDA_TESTS)

    assert read_document(str(path)) == [{"context": {}, "events": []}]


def test_load_config(workspace) -> None:
    cfg, secrets = asyncio.run(load_config(ToolSettings(base_dir=str(workspace))))

    assert cfg.function_name == "orders-api"
    assert secrets.region == "us-east-1"
    assert secrets.variables == {"STAGE": "dev"}


def test_load_config_fails_when_function_name_empty(workspace) -> None:
    write_json(workspace / FILE_LAMBDA_CONFIG, config_doc(FunctionName=""))

    with pytest.raises(ValidationError) as excinfo:
        asyncio.run(load_config(ToolSettings(base_dir=str(workspace))))

    assert str(excinfo.value) == "Invalid Lambda config"


def test_load_config_fails_when_secrets_missing(workspace) -> None:
    os.remove(workspace / FILE_LAMBDA_SECRETS)

    with pytest.raises(MissingFileError):
        asyncio.run(load_config(ToolSettings(base_dir=str(workspace))))


def test_read_non_utf8_document(tmp_path) -> None:
    path = tmp_path / FILE_LAMBDA_CONFIG
    path.write_bytes(b'{"a": "\xff\xfe"}')

    with pytest.raises(InvalidJSONError):
        read_document(str(path), FILE_LAMBDA_CONFIG)


def test_init_overwrites_non_utf8_document(tmp_path) -> None:
    path = tmp_path / FILE_LAMBDA_TESTS
    path.write_bytes(b"\xff\xfe garbage")

    message = load_or_init(str(path), FILE_LAMBDA_TESTS)

    assert "has been written" in message
    assert read_document(str(path), FILE_LAMBDA_TESTS) == default_document(FILE_LAMBDA_TESTS)
