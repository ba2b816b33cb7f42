from llm_connector_lib.client import LiteLLMChatConnector
from llm_connector_lib.exceptions import (
    LLMConnectorError,
    ConfigurationError,
    AuthenticationError,
    RateLimitError,
    GatewayError,
    ModelDiscoveryError,
    OptionClampWarning,
)
from llm_connector_lib.data_models.credentials import Credentials
from llm_connector_lib.data_models.metadata import NormalizedMetadata, RawMetadataInput
from llm_connector_lib.data_models.model_selector import (
    ModelLocator,
    ModelSelector,
    PlainModelName,
)
from llm_connector_lib.data_models.options import RequestOptions
from llm_connector_lib.data_models.resolved_config import ResolvedRequestConfig
from llm_connector_lib.services.metadata_normalizer import (
    MetadataNormalizer,
    normalize_metadata,
)
from llm_connector_lib.services.request_resolver import (
    RequestConfigResolver,
    resolve_request_config,
)

__all__ = [
    "LiteLLMChatConnector",
    "LLMConnectorError",
    "ConfigurationError",
    "AuthenticationError",
    "RateLimitError",
    "GatewayError",
    "ModelDiscoveryError",
    "OptionClampWarning",
    "Credentials",
    "NormalizedMetadata",
    "RawMetadataInput",
    "ModelLocator",
    "ModelSelector",
    "PlainModelName",
    "RequestOptions",
    "ResolvedRequestConfig",
    "MetadataNormalizer",
    "normalize_metadata",
    "RequestConfigResolver",
    "resolve_request_config",
]
