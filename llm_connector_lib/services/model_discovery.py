"""
Discovery of the models offered by the gateway.

The listing only feeds the model picker of the node.  The resolver never
depends on it: a model typed in by id stays valid when the listing fails.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from llm_connector_lib.base.constants_base import (
    DISCOVERY_RETRIES,
    DISCOVERY_TIMEOUT,
)
from llm_connector_lib.data_models.constants import (
    CHAT_MODEL_PREFIXES,
    GPT_MODEL_PREFIX,
    NON_CHAT_MARKER,
    OPENAI_API_HOST_PREFIX,
)
from llm_connector_lib.data_models.credentials import Credentials
from llm_connector_lib.data_models.options import RequestOptions
from llm_connector_lib.exceptions import ModelDiscoveryError
from llm_connector_lib.services.request_resolver import RequestConfigResolver
from llm_connector_lib.utils.http import HttpRequester

ORGANIZATION_HEADER = "OpenAI-Organization"


def uses_custom_gateway(
    options_base_url: Optional[str], credentials_url: Optional[str]
) -> bool:
    """
    True when the options or the credentials point to something other than
    the OpenAI API host.
    """
    for url in (options_base_url, credentials_url):
        if url and not url.startswith(OPENAI_API_HOST_PREFIX):
            return True
    return False


def is_chat_model(model_id: str) -> bool:
    """
    Keep fine‑tuned, o1/o3 and ``gpt-*`` models, except the ``instruct`` ones.
    """
    if any(model_id.startswith(prefix) for prefix in CHAT_MODEL_PREFIXES):
        return True
    return model_id.startswith(GPT_MODEL_PREFIX) and NON_CHAT_MARKER not in model_id


class ModelDiscoveryService:
    """
    Service wrapper for the ``GET <base_url>/models`` endpoint.

    Attributes
    ----------
    endpoint : str
        Relative URL of the models listing (``"/models"``).
    """

    endpoint = "/models"

    def __init__(
        self,
        http: HttpRequester,
        custom_gateway: bool = True,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """
        Parameters
        ----------
        http : HttpRequester
            Requester bound to the resolved base URL.
        custom_gateway : bool, default ``True``
            When ``False`` (plain OpenAI API) only chat models are listed.
        logger : Optional[logging.Logger]
            Logger instance used for debugging and error reporting.
        """
        self.http = http
        self.custom_gateway = custom_gateway
        self.logger = logger or logging.getLogger(__name__)

    @classmethod
    def from_credentials(
        cls,
        credentials: Credentials,
        options: Optional[RequestOptions] = None,
        timeout: int = DISCOVERY_TIMEOUT,
        retries: int = DISCOVERY_RETRIES,
        resolver: Optional[RequestConfigResolver] = None,
        logger: Optional[logging.Logger] = None,
    ) -> "ModelDiscoveryService":
        """
        Build the service with the same base URL precedence as the resolver.
        """
        options = options or RequestOptions()
        resolver = resolver or RequestConfigResolver(logger=logger)
        headers = {}
        if credentials.organization_id:
            headers[ORGANIZATION_HEADER] = credentials.organization_id

        http = HttpRequester(
            base_url=resolver.resolve_base_url(options, credentials),
            token=credentials.api_key or "",
            timeout=timeout,
            retries=retries,
            headers=headers,
            logger=logger,
        )
        return cls(
            http=http,
            custom_gateway=uses_custom_gateway(options.base_url, credentials.url),
            logger=logger,
        )

    def call(self) -> List[Dict[str, Any]]:
        """
        Fetch the raw ``data`` entries of the listing.

        Raises
        ------
        ModelDiscoveryError
            If the gateway cannot be reached or the body is not a listing.
        AuthenticationError, RateLimitError, GatewayError
            Translated HTTP errors.
        """
        try:
            resp = self.http.get(self.endpoint)
        except requests.RequestException as exc:
            raise ModelDiscoveryError(f"Cannot fetch models list: {exc}") from exc

        try:
            body = resp.json()
        except ValueError as exc:
            raise ModelDiscoveryError(f"Invalid response format: {exc}") from exc

        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, list):
            raise ModelDiscoveryError("Models list response has no 'data' list")
        return data

    def list_models(self) -> List[Dict[str, str]]:
        """
        Return ``[{"name": id, "value": id}, ...]`` sorted by name.
        """
        results = []
        for item in self.call():
            model_id = item.get("id") if isinstance(item, dict) else None
            if not model_id:
                continue
            if not self.custom_gateway and not is_chat_model(model_id):
                continue
            results.append({"name": model_id, "value": model_id})

        self.logger.debug("Discovered %d models", len(results))
        return sorted(results, key=lambda m: m["name"])

    def search_models(self, filter_str: Optional[str] = None) -> List[Dict[str, str]]:
        """
        Case‑insensitive substring search over :meth:`list_models`.
        """
        models = self.list_models()
        if not filter_str:
            return models
        needle = filter_str.lower()
        return [m for m in models if needle in m["name"].lower()]
