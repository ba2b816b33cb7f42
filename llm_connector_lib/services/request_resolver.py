"""
Resolution of the outbound chat completion request configuration.

:class:`RequestConfigResolver` reconciles the layered node inputs into one
:class:`~llm_connector_lib.data_models.resolved_config.ResolvedRequestConfig`:

* base URL precedence – explicit option, then credentials, then the default,
* model name resolution for every node schema version,
* clamping of bounded numeric options (reported, never rejected),
* model dependent ``reasoning_effort`` and non default ``response_format``
  passed through ``model_kwargs``,
* metadata attachment, including the ``extra_body`` dual write done by
  :func:`~llm_connector_lib.services.compat.attach_extra_body`,
* ``timeout`` / ``max_retries`` defaults for omitted values.

Only :class:`~llm_connector_lib.exceptions.ConfigurationError` aborts the
resolution.  Every other anomaly ends up in ``diagnostics``.
"""

import logging
import math
import warnings
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel

from llm_connector_lib.exceptions import ConfigurationError, OptionClampWarning
from llm_connector_lib.data_models.constants import (
    DEFAULT_BASE_URL,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT_MS,
    OPTION_BOUNDS,
    REASONING_EFFORTS,
    REASONING_MODEL_PATTERN,
    RESPONSE_FORMAT_TEXT,
    RESPONSE_FORMATS,
)
from llm_connector_lib.data_models.credentials import Credentials
from llm_connector_lib.data_models.diagnostics import Diagnostic, DiagnosticKind
from llm_connector_lib.data_models.metadata import NormalizedMetadata
from llm_connector_lib.data_models.model_selector import (
    ModelLocator,
    ModelSelector,
    build_model_selector,
)
from llm_connector_lib.data_models.options import RequestOptions
from llm_connector_lib.data_models.resolved_config import ResolvedRequestConfig
from llm_connector_lib.services.compat import attach_extra_body

_M = TypeVar("_M", bound=BaseModel)


def supports_reasoning_effort(model_name: str) -> bool:
    """
    Tell whether ``model_name`` accepts ``reasoning_effort``.

    True for ``o1`` and its dated versions (not ``o1-mini``), ``o3`` and
    later o‑series models, and the ``gpt-5`` family.
    """
    return bool(REASONING_MODEL_PATTERN.match(model_name or ""))


def validate_input(
    model_cls: Type[_M], value: Union[_M, Mapping[str, Any], None]
) -> _M:
    """Build ``model_cls`` from host input, raising ``ConfigurationError``."""
    if isinstance(value, model_cls):
        return value
    try:
        return model_cls.model_validate(dict(value or {}))
    except (TypeError, ValueError) as exc:
        # pydantic.ValidationError is a ValueError
        raise ConfigurationError(f"Invalid {model_cls.__name__}: {exc}") from exc


class RequestConfigResolver:
    """
    Build the final request configuration of a chat model client.

    Parameters
    ----------
    default_base_url : str, default ``DEFAULT_BASE_URL``
        Base URL used when neither the options nor the credentials define one.
    logger : Optional[logging.Logger]
        Logger instance; if omitted, a module‑level logger is used.
    """

    def __init__(
        self,
        default_base_url: str = DEFAULT_BASE_URL,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.default_base_url = default_base_url
        self.logger = logger or logging.getLogger(__name__)

    # ------------------------------------------------------------------ #
    def resolve(
        self,
        credentials: Union[Credentials, Mapping[str, Any]],
        options: Union[RequestOptions, Mapping[str, Any], None],
        model_selector: Any,
        schema_version: float,
        normalized_metadata: Union[
            NormalizedMetadata, Mapping[str, Any], None
        ] = None,
        extra_body: Optional[Dict[str, Any]] = None,
        item_index: int = 0,
    ) -> ResolvedRequestConfig:
        """
        Resolve the request configuration.

        Parameters
        ----------
        credentials : Credentials | mapping
            Credentials as stored by the host.
        options : RequestOptions | mapping | None
            Node options; omitted options stay unset.
        model_selector : ModelSelector | str | mapping
            Model input, interpreted according to ``schema_version``.
        schema_version : float
            Node schema version.
        normalized_metadata : NormalizedMetadata | mapping | None
            Output of the metadata normalizer.  When a ``NormalizedMetadata``
            is given, its ``extra_body`` and diagnostics are used too.
        extra_body : Optional[Dict[str, Any]]
            Gateway envelope; overrides the one of ``normalized_metadata``.
        item_index : int, default ``0``
            Index of the processed workflow item, used in log lines only.

        Returns
        -------
        ResolvedRequestConfig
            The final configuration.

        Raises
        ------
        ConfigurationError
            If ``api_key`` is missing, the resolved model name is empty or
            the input cannot be read at all.
        """
        credentials = validate_input(Credentials, credentials)
        options = validate_input(RequestOptions, options)
        if not credentials.api_key:
            raise ConfigurationError("Credentials are missing the required 'api_key'")

        diagnostics: List[Diagnostic] = []
        metadata: Dict[str, Any] = {}
        if isinstance(normalized_metadata, NormalizedMetadata):
            metadata = dict(normalized_metadata.metadata)
            if extra_body is None:
                extra_body = normalized_metadata.extra_body
            diagnostics.extend(normalized_metadata.diagnostics)
        elif normalized_metadata:
            metadata = dict(normalized_metadata)

        model = self.resolve_model_name(model_selector, schema_version, diagnostics)
        base_url = self.resolve_base_url(options, credentials)

        config: Dict[str, Any] = {
            "api_key": credentials.api_key,
            "base_url": base_url,
            "organization": credentials.organization_id or None,
            "model": model,
            "metadata": metadata,
            "model_kwargs": self.build_model_kwargs(model, options, diagnostics),
            "timeout": (
                DEFAULT_TIMEOUT_MS if options.timeout is None else options.timeout
            ),
            "max_retries": (
                DEFAULT_MAX_RETRIES
                if options.max_retries is None
                else options.max_retries
            ),
        }
        config.update(self.validate_numeric_options(options, diagnostics))
        attach_extra_body(config, extra_body)

        self.logger.debug(
            "[item %d] Resolved model=%s base_url=%s model_kwargs=%s",
            item_index,
            model,
            base_url,
            sorted(config["model_kwargs"]),
        )
        return ResolvedRequestConfig(diagnostics=diagnostics, **config)

    # ------------------------------------------------------------------ #
    def resolve_base_url(
        self, options: RequestOptions, credentials: Credentials
    ) -> str:
        """Explicit option first, then the credentials URL, then the default."""
        if options.base_url:
            return options.base_url
        if credentials.url:
            return credentials.url
        return self.default_base_url

    # ------------------------------------------------------------------ #
    def resolve_model_name(
        self,
        model_selector: Any,
        schema_version: float,
        diagnostics: List[Diagnostic],
    ) -> str:
        """
        Reduce the model input to a model name.

        Raises
        ------
        ConfigurationError
            If the schema version is not a number, the selector cannot be
            read or the resolved name is empty.
        """
        try:
            selector: ModelSelector = build_model_selector(
                model_selector, schema_version
            )
        except (TypeError, ValueError) as exc:
            # pydantic.ValidationError is a ValueError
            raise ConfigurationError(
                f"Cannot read the model selector {model_selector!r} "
                f"for schema version {schema_version!r}: {exc}"
            ) from exc

        if self._selector_was_coerced(model_selector, selector):
            diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.MODEL_SELECTOR_COERCED,
                    field="model",
                    message=(
                        f"Model input of schema version {schema_version} "
                        f"read as {selector.kind} selector"
                    ),
                    original=(
                        model_selector.model_dump()
                        if isinstance(model_selector, BaseModel)
                        else model_selector
                    ),
                    value=selector.resolved_name(),
                )
            )

        model = selector.resolved_name()
        if not model:
            raise ConfigurationError(
                f"Model name resolved to an empty value "
                f"(schema version {schema_version})"
            )
        return model

    @staticmethod
    def _selector_was_coerced(raw: Any, selector: ModelSelector) -> bool:
        if isinstance(selector, ModelLocator):
            return not isinstance(raw, (ModelLocator, Mapping))
        return isinstance(raw, (ModelLocator, Mapping))

    # ------------------------------------------------------------------ #
    def validate_numeric_options(
        self, options: RequestOptions, diagnostics: List[Diagnostic]
    ) -> Dict[str, Any]:
        """
        Clamp every bounded numeric option that was set.

        ``max_tokens`` below zero is the host's "no limit" value and is left
        out of the configuration.  A NaN value has no place in the bounds and
        is dropped with a diagnostic.
        """
        validated = {}
        for name in OPTION_BOUNDS:
            value = getattr(options, name)
            if value is None:
                continue
            if math.isnan(value):
                self._drop_option(name, value, diagnostics)
                continue
            if name == "max_tokens" and value < 0:
                continue
            validated[name] = self.clamp_option(name, value, diagnostics)
        return validated

    def clamp_option(
        self, name: str, value: Union[int, float], diagnostics: List[Diagnostic]
    ) -> Union[int, float]:
        """
        Clamp ``value`` to the bounds declared for ``name``.

        A clamped value is logged, recorded as a diagnostic and emitted as
        :class:`~llm_connector_lib.exceptions.OptionClampWarning`.
        """
        low, high = OPTION_BOUNDS[name]
        clamped = value
        if low is not None and value < low:
            clamped = low
        elif high is not None and value > high:
            clamped = high
        if clamped == value:
            return value

        message = (
            f"Option '{name}' = {value} is outside [{low}, {high}], "
            f"clamped to {clamped}"
        )
        self.logger.warning(message)
        warnings.warn(message, OptionClampWarning, stacklevel=4)
        diagnostics.append(
            Diagnostic(
                kind=DiagnosticKind.OPTION_CLAMPED,
                field=name,
                message=message,
                original=value,
                value=clamped,
            )
        )
        return clamped

    # ------------------------------------------------------------------ #
    def build_model_kwargs(
        self, model: str, options: RequestOptions, diagnostics: List[Diagnostic]
    ) -> Dict[str, Any]:
        """
        Extra request fields not covered by the client's own parameters.

        * ``response_format`` as ``{"type": ...}`` unless it is ``"text"``,
        * ``reasoning_effort`` only for models matching
          :func:`supports_reasoning_effort`.

        Unknown enum values are dropped with a diagnostic.
        """
        model_kwargs: Dict[str, Any] = {}

        response_format = options.response_format
        if response_format and response_format not in RESPONSE_FORMATS:
            self._drop_option("response_format", response_format, diagnostics)
        elif response_format and response_format != RESPONSE_FORMAT_TEXT:
            model_kwargs["response_format"] = {"type": response_format}

        reasoning_effort = options.reasoning_effort
        if reasoning_effort and reasoning_effort not in REASONING_EFFORTS:
            self._drop_option("reasoning_effort", reasoning_effort, diagnostics)
        elif reasoning_effort and supports_reasoning_effort(model):
            model_kwargs["reasoning_effort"] = reasoning_effort
        elif reasoning_effort:
            self.logger.debug(
                "reasoning_effort is not supported by %s, not sent", model
            )

        return model_kwargs

    def _drop_option(
        self, name: str, value: Any, diagnostics: List[Diagnostic]
    ) -> None:
        message = f"Option '{name}' has unsupported value {value!r}, not sent"
        self.logger.warning(message)
        diagnostics.append(
            Diagnostic(
                kind=DiagnosticKind.OPTION_DROPPED,
                field=name,
                message=message,
                original=value,
            )
        )


def resolve_request_config(
    credentials: Union[Credentials, Mapping[str, Any]],
    options: Union[RequestOptions, Mapping[str, Any], None],
    model_selector: Any,
    schema_version: float,
    normalized_metadata: Union[NormalizedMetadata, Mapping[str, Any], None] = None,
    extra_body: Optional[Dict[str, Any]] = None,
) -> ResolvedRequestConfig:
    """Shortcut for ``RequestConfigResolver().resolve(...)``."""
    return RequestConfigResolver().resolve(
        credentials,
        options,
        model_selector,
        schema_version,
        normalized_metadata,
        extra_body,
    )
