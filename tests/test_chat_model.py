from langchain_openai import ChatOpenAI

from llm_connector_lib.data_models.resolved_config import ResolvedRequestConfig
from llm_connector_lib.services.chat_model import build_chat_model, chat_model_kwargs
from llm_connector_lib.services.tracing import MetadataTracingHandler


def make_config(**overrides):
    values = {
        "api_key": "sk-test",
        "base_url": "http://litellm.local:4000/v1",
        "model": "o3-mini",
        "metadata": {"sessionId": "s-1"},
        "extra_body": {"metadata": {"sessionId": "s-1"}},
        "model_kwargs": {
            "response_format": {"type": "json_object"},
            "reasoning_effort": "high",
            "extra_body": {"metadata": {"sessionId": "s-1"}},
        },
        "timeout": 30000,
        "max_retries": 4,
        "temperature": 0.3,
    }
    values.update(overrides)
    return ResolvedRequestConfig(**values)


def test_kwargs_mapping():
    kwargs = chat_model_kwargs(make_config())
    assert kwargs["model"] == "o3-mini"
    assert kwargs["base_url"] == "http://litellm.local:4000/v1"
    assert kwargs["timeout"] == 30.0
    assert kwargs["max_retries"] == 4
    assert kwargs["temperature"] == 0.3
    assert "top_p" not in kwargs
    assert "organization" not in kwargs


def test_explicit_params_are_lifted_out_of_model_kwargs():
    kwargs = chat_model_kwargs(make_config())
    assert kwargs["model_kwargs"] == {"response_format": {"type": "json_object"}}
    assert kwargs["reasoning_effort"] == "high"
    assert kwargs["extra_body"] == {"metadata": {"sessionId": "s-1"}}
    assert kwargs["metadata"] == {"sessionId": "s-1"}


def test_config_is_left_untouched():
    config = make_config()
    chat_model_kwargs(config)
    assert "reasoning_effort" in config.model_kwargs
    assert "extra_body" in config.model_kwargs


def test_no_extra_body_without_metadata():
    config = make_config(metadata={}, extra_body=None, model_kwargs={})
    kwargs = chat_model_kwargs(config)
    assert "extra_body" not in kwargs
    assert kwargs["model_kwargs"] == {}


def test_organization_is_forwarded():
    assert chat_model_kwargs(make_config(organization="org-1"))["organization"] == "org-1"


def test_build_chat_model():
    handler = MetadataTracingHandler({"sessionId": "s-1"})
    chat = build_chat_model(make_config(organization="org-1"), callbacks=[handler])
    assert isinstance(chat, ChatOpenAI)
    assert chat.model_name == "o3-mini"
    assert chat.openai_api_base == "http://litellm.local:4000/v1"
    assert chat.openai_organization == "org-1"
    assert chat.max_retries == 4
    assert chat.reasoning_effort == "high"
    assert chat.extra_body == {"metadata": {"sessionId": "s-1"}}
    assert chat.model_kwargs == {"response_format": {"type": "json_object"}}
    assert chat.callbacks == [handler]
