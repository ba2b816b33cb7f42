import json
import logging

import pytest

from llm_connector_lib.exceptions import ConfigurationError
from llm_connector_lib.data_models.diagnostics import DiagnosticKind
from llm_connector_lib.data_models.metadata import RawMetadataInput
from llm_connector_lib.services.metadata_normalizer import (
    MetadataNormalizer,
    MetadataParseFallback,
    ParsedMetadata,
    build_extra_body,
    normalize_metadata,
    parse_custom_metadata,
)


@pytest.mark.parametrize(
    "text",
    [
        '{"project": "example-project", "env": "dev", "workflow": "main-flow"}',
        '{"nested": {"a": [1, 2, 3]}, "flag": true, "none": null}',
        "{}",
    ],
)
def test_json_object_text_becomes_metadata(text):
    result = normalize_metadata({"customMetadata": text})
    assert result.metadata == json.loads(text)
    assert result.diagnostics == []


@pytest.mark.parametrize(
    "text",
    ["{not json", "{'single': 'quotes'}", '{"a": 1,}', "project=x"],
)
def test_malformed_text_kept_under_raw_key(text):
    result = normalize_metadata({"customMetadata": text})
    assert result.metadata == {"_raw": text}
    assert result.extra_body == {"metadata": {"_raw": text}}
    assert [d.kind for d in result.diagnostics] == [
        DiagnosticKind.METADATA_PARSE_FALLBACK
    ]


@pytest.mark.parametrize("text", ["[1, 2]", '"just a string"', "42", "null"])
def test_json_that_is_not_an_object_falls_back(text):
    result = normalize_metadata({"customMetadata": text})
    assert result.metadata == {"_raw": text}


@pytest.mark.parametrize("value", [None, "", "   \n\t"])
def test_empty_custom_metadata_gives_empty_mapping(value):
    result = normalize_metadata({"customMetadata": value})
    assert result.metadata == {}
    assert result.extra_body is None


def test_mapping_is_used_directly_and_not_mutated():
    custom = {"env": "dev", "tags": ["a"]}
    result = normalize_metadata(
        RawMetadataInput(custom_metadata=custom, session_id="s-1")
    )
    assert result.metadata == {"env": "dev", "tags": ["a"], "sessionId": "s-1"}
    assert custom == {"env": "dev", "tags": ["a"]}

    result.metadata["tags"].append("b")
    assert custom["tags"] == ["a"]


def test_session_and_user_override_custom_keys():
    result = normalize_metadata(
        {
            "sessionId": "A",
            "userId": "U",
            "customMetadata": {"sessionId": "B", "userId": "V", "env": "dev"},
        }
    )
    assert result.metadata == {"sessionId": "A", "userId": "U", "env": "dev"}


def test_session_overrides_keys_of_parsed_text():
    result = normalize_metadata(
        {"sessionId": "A", "customMetadata": '{"sessionId": "B"}'}
    )
    assert result.metadata["sessionId"] == "A"


def test_empty_identifiers_are_not_added():
    result = normalize_metadata(
        {"sessionId": "", "userId": None, "customMetadata": {"env": "dev"}}
    )
    assert result.metadata == {"env": "dev"}


def test_identifiers_are_added_to_raw_fallback():
    result = normalize_metadata({"userId": "rlquilez", "customMetadata": "oops"})
    assert result.metadata == {"_raw": "oops", "userId": "rlquilez"}


def test_no_input_gives_no_extra_body():
    result = normalize_metadata()
    assert result.metadata == {}
    assert result.extra_body is None


def test_extra_body_wraps_metadata():
    assert build_extra_body({}) is None
    assert build_extra_body({"env": "dev"}) == {"metadata": {"env": "dev"}}


def test_parse_outcomes():
    assert parse_custom_metadata('{"a": 1}') == ParsedMetadata(mapping={"a": 1})
    fallback = parse_custom_metadata("{")
    assert isinstance(fallback, MetadataParseFallback)
    assert fallback.as_mapping() == {"_raw": "{"}

    other = parse_custom_metadata(["a", "b"])
    assert isinstance(other, MetadataParseFallback)
    assert other.as_mapping() == {"_raw": ["a", "b"]}


def test_fallback_is_logged(caplog):
    normalizer = MetadataNormalizer(logger=logging.getLogger("test.normalizer"))
    with caplog.at_level(logging.WARNING, logger="test.normalizer"):
        normalizer.normalize({"customMetadata": "{broken"}, item_index=3)
    assert "[item 3]" in caplog.text
    assert "_raw" in caplog.text


def test_numeric_identifiers_are_kept():
    result = normalize_metadata(
        {"sessionId": 12345, "userId": 7, "customMetadata": "{}"}
    )
    assert result.metadata == {"sessionId": 12345, "userId": 7}
    assert result.extra_body == {"metadata": {"sessionId": 12345, "userId": 7}}
    assert result.diagnostics == []


def test_zero_identifier_is_not_overlaid():
    result = normalize_metadata({"sessionId": 0, "customMetadata": {"sessionId": "a"}})
    assert result.metadata == {"sessionId": "a"}


def test_input_that_is_not_a_mapping_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        normalize_metadata(["sessionId", "s-1"])
