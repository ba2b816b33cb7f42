"""
Custom exception hierarchy for the LLM‑Connector library.

All public exceptions inherit from :class:`LLMConnectorError`, allowing callers
to catch a single base class for any connector‑related failure while still
being able to differentiate specific error conditions when needed.

Only :class:`ConfigurationError` is raised by the configuration resolution
itself.  Anomalies that are absorbed into the resolved configuration (clamped
options, unparsable metadata) are reported as diagnostics and, for clamped
options, as :class:`OptionClampWarning` through the :mod:`warnings` module.
"""


class LLMConnectorError(Exception):
    """Base exception for all LLM‑Connector‑specific errors."""

    pass


class ConfigurationError(LLMConnectorError):
    """
    Raised when the request configuration cannot be resolved.

    Typical causes are an empty model name after selector resolution or
    credentials without an ``api_key``.
    """

    pass


class AuthenticationError(LLMConnectorError):
    """Raised when the gateway returns HTTP 401/403 – invalid or missing key."""

    pass


class RateLimitError(LLMConnectorError):
    """Raised when the gateway returns HTTP 429 – request rate limit exceeded."""

    pass


class GatewayError(LLMConnectorError):
    """Raised for any other HTTP 4xx/5xx returned by the gateway."""

    pass


class ModelDiscoveryError(LLMConnectorError):
    """Raised when the models listing cannot be fetched or decoded."""

    pass


class OptionClampWarning(UserWarning):
    """Emitted when a numeric option was clamped to its declared bounds."""

    pass
