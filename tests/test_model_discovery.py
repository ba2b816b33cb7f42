import pytest
import requests

from llm_connector_lib.exceptions import (
    AuthenticationError,
    GatewayError,
    ModelDiscoveryError,
    RateLimitError,
)
from llm_connector_lib.data_models.credentials import Credentials
from llm_connector_lib.data_models.options import RequestOptions
from llm_connector_lib.services.model_discovery import (
    ModelDiscoveryService,
    is_chat_model,
    uses_custom_gateway,
)
from llm_connector_lib.utils.http import HttpRequester

MODELS = [
    "gpt-4o",
    "o3-mini",
    "gpt-3.5-turbo-instruct",
    "text-embedding-3-small",
    "ft:gpt-4o-mini:org::abc",
    "dall-e-3",
    "o1",
]


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=""):
        self.status_code = status_code
        self._body = body
        self.text = text

    def json(self):
        if isinstance(self._body, Exception):
            raise self._body
        return self._body


def make_service(monkeypatch, response, custom_gateway=True):
    http = HttpRequester(base_url="http://litellm.local:4000/v1", token="sk-test")
    calls = []

    def fake_get(url, **kwargs):
        calls.append(url)
        if isinstance(response, Exception):
            raise response
        return response

    monkeypatch.setattr(http.session, "get", fake_get)
    return ModelDiscoveryService(http, custom_gateway=custom_gateway), calls


def listing(ids):
    return FakeResponse(body={"object": "list", "data": [{"id": i} for i in ids]})


def test_custom_gateway_lists_everything_sorted(monkeypatch):
    service, calls = make_service(monkeypatch, listing(MODELS))
    models = service.list_models()
    assert [m["name"] for m in models] == sorted(MODELS)
    assert all(m["name"] == m["value"] for m in models)
    assert calls == ["http://litellm.local:4000/v1/models"]


def test_openai_host_lists_chat_models_only(monkeypatch):
    service, _ = make_service(monkeypatch, listing(MODELS), custom_gateway=False)
    names = [m["name"] for m in service.list_models()]
    assert names == ["ft:gpt-4o-mini:org::abc", "gpt-4o", "o1", "o3-mini"]


def test_search_is_case_insensitive(monkeypatch):
    service, _ = make_service(monkeypatch, listing(["GPT-4o", "o3-mini", "gpt-5"]))
    assert [m["name"] for m in service.search_models("gpt")] == ["GPT-4o", "gpt-5"]
    assert len(service.search_models(None)) == 3


def test_entries_without_id_are_skipped(monkeypatch):
    body = {"data": [{"id": "a"}, {"object": "model"}, "b", {"id": ""}]}
    service, _ = make_service(monkeypatch, FakeResponse(body=body))
    assert service.list_models() == [{"name": "a", "value": "a"}]


@pytest.mark.parametrize(
    "response, error",
    [
        (FakeResponse(401), AuthenticationError),
        (FakeResponse(403), AuthenticationError),
        (FakeResponse(429), RateLimitError),
        (FakeResponse(500, text="boom"), GatewayError),
        (FakeResponse(body=ValueError("no json")), ModelDiscoveryError),
        (FakeResponse(body={"models": []}), ModelDiscoveryError),
        (FakeResponse(body=["a"]), ModelDiscoveryError),
        (requests.ConnectionError("refused"), ModelDiscoveryError),
    ],
)
def test_errors_are_translated(monkeypatch, response, error):
    service, _ = make_service(monkeypatch, response)
    with pytest.raises(error):
        service.list_models()


def test_chat_model_filter():
    assert is_chat_model("gpt-4.1-mini")
    assert is_chat_model("ft:davinci-002:org::x")
    assert not is_chat_model("gpt-3.5-turbo-instruct")
    assert not is_chat_model("whisper-1")


def test_custom_gateway_detection():
    assert not uses_custom_gateway(None, "https://api.openai.com/v1")
    assert not uses_custom_gateway("https://api.openai.com/v1", None)
    assert uses_custom_gateway(None, "http://litellm:4000")
    assert uses_custom_gateway("http://litellm:4000", "https://api.openai.com/v1")
    assert uses_custom_gateway("https://api.openai.com/v1", "http://litellm:4000")


def test_service_from_credentials():
    credentials = Credentials(
        apiKey="sk-test", organizationId="org-1", url="https://api.openai.com/v1"
    )
    service = ModelDiscoveryService.from_credentials(
        credentials, RequestOptions(baseURL="http://gateway:4000/v1/")
    )
    assert service.http.base_url == "http://gateway:4000/v1"
    assert service.http.session.headers["Authorization"] == "Bearer sk-test"
    assert service.http.session.headers["OpenAI-Organization"] == "org-1"
    assert service.custom_gateway is True


def test_service_for_openai_host():
    service = ModelDiscoveryService.from_credentials(Credentials(apiKey="sk"))
    assert service.http.base_url == "https://api.openai.com/v1"
    assert "OpenAI-Organization" not in service.http.session.headers
    assert service.custom_gateway is False
