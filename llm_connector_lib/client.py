import logging
from typing import Optional, Dict, Any, Union, List

from langchain_openai import ChatOpenAI

from llm_connector_lib.base.constants_base import (
    DEFAULT_BASE_URL,
    DISCOVERY_RETRIES,
    DISCOVERY_TIMEOUT,
)
from llm_connector_lib.data_models.constants import MODEL_LOCATOR_MIN_VERSION
from llm_connector_lib.data_models.credentials import Credentials
from llm_connector_lib.data_models.metadata import RawMetadataInput
from llm_connector_lib.data_models.options import RequestOptions
from llm_connector_lib.data_models.resolved_config import ResolvedRequestConfig
from llm_connector_lib.services.chat_model import build_chat_model
from llm_connector_lib.services.metadata_normalizer import MetadataNormalizer
from llm_connector_lib.services.model_discovery import ModelDiscoveryService
from llm_connector_lib.services.request_resolver import (
    RequestConfigResolver,
    validate_input,
)
from llm_connector_lib.services.tracing import MetadataTracingHandler


class LiteLLMChatConnector:
    """
    Entry point of the library, the chat model node of one workflow.

    Composes the metadata normalizer, the request configuration resolver,
    the ``ChatOpenAI`` factory and the model discovery service.  The
    connector keeps no per‑call state, one instance serves any number of
    items.

    Parameters
    ----------
    default_base_url : str, default ``DEFAULT_BASE_URL``
        Base URL used when neither the options nor the credentials set one.
    discovery_timeout : int, default ``DISCOVERY_TIMEOUT``
        Timeout (seconds) of the models listing request.
    discovery_retries : int, default ``DISCOVERY_RETRIES``
        Retries of the models listing request.
    logger : Optional[logging.Logger]
        Logger instance; if omitted, a module‑level logger is used.
    """

    def __init__(
        self,
        default_base_url: str = DEFAULT_BASE_URL,
        discovery_timeout: int = DISCOVERY_TIMEOUT,
        discovery_retries: int = DISCOVERY_RETRIES,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self.discovery_timeout = discovery_timeout
        self.discovery_retries = discovery_retries
        self.normalizer = MetadataNormalizer(logger=self.logger)
        self.resolver = RequestConfigResolver(
            default_base_url=default_base_url, logger=self.logger
        )

    # ------------------------------------------------------------------ #
    def build_config(
        self,
        credentials: Union[Dict[str, Any], Credentials],
        options: Optional[Union[Dict[str, Any], RequestOptions]] = None,
        model: Any = None,
        schema_version: float = MODEL_LOCATOR_MIN_VERSION,
        metadata: Optional[Union[Dict[str, Any], RawMetadataInput]] = None,
        item_index: int = 0,
    ) -> ResolvedRequestConfig:
        """
        Normalize the metadata and resolve the request configuration.

        Parameters
        ----------
        credentials : Dict[str, Any] | Credentials
            Credentials as stored by the host (camelCase keys accepted).
        options : Dict[str, Any] | RequestOptions | None
            Node options; omitted options stay unset.
        model : Any
            Model name or locator, read according to ``schema_version``.
        schema_version : float, default ``1.2``
            Node schema version.
        metadata : Dict[str, Any] | RawMetadataInput | None
            ``sessionId``, ``userId`` and ``customMetadata`` inputs.
        item_index : int, default ``0``
            Index of the processed workflow item, used in log lines only.

        Returns
        -------
        ResolvedRequestConfig
            The final configuration with its diagnostics.

        Raises
        ------
        ConfigurationError
            If ``api_key`` is missing, the model name is empty or the input
            cannot be read.
        """
        normalized = self.normalizer.normalize(metadata, item_index=item_index)
        return self.resolver.resolve(
            credentials=credentials,
            options=options,
            model_selector=model,
            schema_version=schema_version,
            normalized_metadata=normalized,
            item_index=item_index,
        )

    # ------------------------------------------------------------------ #
    def create_chat_model(
        self,
        credentials: Union[Dict[str, Any], Credentials],
        options: Optional[Union[Dict[str, Any], RequestOptions]] = None,
        model: Any = None,
        schema_version: float = MODEL_LOCATOR_MIN_VERSION,
        metadata: Optional[Union[Dict[str, Any], RawMetadataInput]] = None,
        item_index: int = 0,
    ) -> ChatOpenAI:
        """
        Build a ``ChatOpenAI`` client for the resolved configuration.

        Takes the same arguments as :meth:`build_config`.  The client carries
        a :class:`MetadataTracingHandler` bound to the normalized metadata.
        """
        config = self.build_config(
            credentials=credentials,
            options=options,
            model=model,
            schema_version=schema_version,
            metadata=metadata,
            item_index=item_index,
        )
        tracing = MetadataTracingHandler(
            config.metadata, item_index=item_index, logger=self.logger
        )
        return build_chat_model(config, callbacks=[tracing])

    # ------------------------------------------------------------------ #
    def list_models(
        self,
        credentials: Union[Dict[str, Any], Credentials],
        options: Optional[Union[Dict[str, Any], RequestOptions]] = None,
    ) -> List[Dict[str, str]]:
        """
        List the models offered by the gateway.

        Returns
        -------
        List[Dict[str, str]]
            ``{"name": id, "value": id}`` items sorted by name.

        Raises
        ------
        ModelDiscoveryError, AuthenticationError, RateLimitError, GatewayError
            When the listing cannot be fetched.
        """
        discovery = self._discovery(credentials, options)
        try:
            return discovery.list_models()
        finally:
            discovery.http.close()

    # ------------------------------------------------------------------ #
    def search_models(
        self,
        credentials: Union[Dict[str, Any], Credentials],
        options: Optional[Union[Dict[str, Any], RequestOptions]] = None,
        filter_str: Optional[str] = None,
    ) -> List[Dict[str, str]]:
        """Case‑insensitive substring search over :meth:`list_models`."""
        discovery = self._discovery(credentials, options)
        try:
            return discovery.search_models(filter_str)
        finally:
            discovery.http.close()

    def _discovery(
        self,
        credentials: Union[Dict[str, Any], Credentials],
        options: Optional[Union[Dict[str, Any], RequestOptions]],
    ) -> ModelDiscoveryService:
        return ModelDiscoveryService.from_credentials(
            credentials=validate_input(Credentials, credentials),
            options=validate_input(RequestOptions, options),
            timeout=self.discovery_timeout,
            retries=self.discovery_retries,
            resolver=self.resolver,
            logger=self.logger,
        )
