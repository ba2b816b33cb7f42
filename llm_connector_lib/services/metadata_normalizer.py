"""
Normalization of the metadata side channel.

The host collects three inputs in the *JSON Metadata* section of the node:
free form custom metadata (JSON text or an already structured mapping), a
session id and a user id.  :class:`MetadataNormalizer` merges them into a
single key/value bag and derives the ``extra_body`` envelope understood by the
LiteLLM gateway (which forwards it to Langfuse).

Malformed custom metadata never fails the call.  The parse step returns an
explicit outcome – :class:`ParsedMetadata` or :class:`MetadataParseFallback` –
and the fallback keeps the original input under the reserved ``_raw`` key, so
nothing typed by the operator is lost.
"""

import copy
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import ValidationError

from llm_connector_lib.exceptions import ConfigurationError
from llm_connector_lib.data_models.constants import (
    EXTRA_BODY_METADATA_KEY,
    RAW_METADATA_KEY,
    SESSION_ID_KEY,
    USER_ID_KEY,
)
from llm_connector_lib.data_models.diagnostics import Diagnostic, DiagnosticKind
from llm_connector_lib.data_models.metadata import NormalizedMetadata, RawMetadataInput


@dataclass(frozen=True)
class ParsedMetadata:
    """Custom metadata that was read as a mapping."""

    mapping: Dict[str, Any] = field(default_factory=dict)

    def as_mapping(self) -> Dict[str, Any]:
        return dict(self.mapping)


@dataclass(frozen=True)
class MetadataParseFallback:
    """Custom metadata that could not be read as a mapping."""

    raw: Any
    reason: str

    def as_mapping(self) -> Dict[str, Any]:
        return {RAW_METADATA_KEY: self.raw}

    def as_diagnostic(self) -> Diagnostic:
        return Diagnostic(
            kind=DiagnosticKind.METADATA_PARSE_FALLBACK,
            field="custom_metadata",
            message=f"Custom metadata kept under '{RAW_METADATA_KEY}': {self.reason}",
            original=self.raw,
            value={RAW_METADATA_KEY: self.raw},
        )


MetadataParseOutcome = Union[ParsedMetadata, MetadataParseFallback]


def parse_custom_metadata(custom_metadata: Any) -> MetadataParseOutcome:
    """
    Read custom metadata as a mapping.

    Parameters
    ----------
    custom_metadata : Any
        ``None``, JSON text or a mapping.

    Returns
    -------
    MetadataParseOutcome
        * ``ParsedMetadata({})`` for ``None`` and empty / blank text,
        * ``ParsedMetadata`` with the decoded object for JSON object text,
        * ``ParsedMetadata`` with a deep copy of a mapping input,
        * ``MetadataParseFallback`` for invalid JSON, JSON that is not an
          object (array, string, number ...) and any other input type.
    """
    if custom_metadata is None:
        return ParsedMetadata()

    if isinstance(custom_metadata, str):
        if not custom_metadata.strip():
            return ParsedMetadata()
        try:
            parsed = json.loads(custom_metadata)
        except ValueError as exc:
            return MetadataParseFallback(
                raw=custom_metadata, reason=f"invalid JSON ({exc})"
            )
        if not isinstance(parsed, dict):
            return MetadataParseFallback(
                raw=custom_metadata,
                reason=f"JSON {type(parsed).__name__} is not an object",
            )
        return ParsedMetadata(mapping=parsed)

    if isinstance(custom_metadata, Mapping):
        return ParsedMetadata(mapping=copy.deepcopy(dict(custom_metadata)))

    return MetadataParseFallback(
        raw=custom_metadata,
        reason=f"unsupported type {type(custom_metadata).__name__}",
    )


def build_extra_body(metadata: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
    """
    Wrap non‑empty metadata into the gateway envelope.

    Returns ``None`` for empty metadata, so no empty envelope is sent.
    """
    if not metadata:
        return None
    return {EXTRA_BODY_METADATA_KEY: dict(metadata)}


class MetadataNormalizer:
    """
    Merge custom metadata, session id and user id into one metadata bag.

    The normalizer holds no state besides its logger; a single instance can
    be shared by any number of concurrent invocations.
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger(__name__)

    def normalize(
        self,
        raw: Union[RawMetadataInput, Mapping[str, Any], None] = None,
        item_index: int = 0,
    ) -> NormalizedMetadata:
        """
        Normalize the raw metadata input.

        Parameters
        ----------
        raw : RawMetadataInput | mapping | None
            Raw input, a mapping may use the host keys (``sessionId``,
            ``userId``, ``customMetadata``).
        item_index : int, default ``0``
            Index of the processed workflow item, used in log lines only.

        Returns
        -------
        NormalizedMetadata
            Metadata bag, optional ``extra_body`` envelope and diagnostics.

        Raises
        ------
        ConfigurationError
            If ``raw`` is not a mapping at all.  Malformed custom metadata
            and identifiers of any type are never an error.
        """
        raw = self._as_input(raw)

        diagnostics = []
        outcome = parse_custom_metadata(raw.custom_metadata)
        if isinstance(outcome, MetadataParseFallback):
            self.logger.warning(
                "[item %d] Custom metadata kept under '%s': %s",
                item_index,
                RAW_METADATA_KEY,
                outcome.reason,
            )
            diagnostics.append(outcome.as_diagnostic())

        metadata = outcome.as_mapping()
        # session first, then user: both win over custom keys of the same name
        if raw.session_id:
            metadata[SESSION_ID_KEY] = raw.session_id
        if raw.user_id:
            metadata[USER_ID_KEY] = raw.user_id

        extra_body = build_extra_body(metadata)
        self.logger.debug(
            "[item %d] Metadata prepared: %s (extra_body: %s)",
            item_index,
            metadata,
            extra_body is not None,
        )
        return NormalizedMetadata(
            metadata=metadata, extra_body=extra_body, diagnostics=diagnostics
        )

    @staticmethod
    def _as_input(
        raw: Union[RawMetadataInput, Mapping[str, Any], None],
    ) -> RawMetadataInput:
        if raw is None:
            return RawMetadataInput()
        if isinstance(raw, RawMetadataInput):
            return raw
        try:
            return RawMetadataInput.model_validate(raw)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid metadata input: {exc}") from exc


def normalize_metadata(
    raw: Union[RawMetadataInput, Mapping[str, Any], None] = None,
) -> NormalizedMetadata:
    """Shortcut for ``MetadataNormalizer().normalize(raw)``."""
    return MetadataNormalizer().normalize(raw)
