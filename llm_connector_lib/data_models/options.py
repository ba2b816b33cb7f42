"""
Per‑node request options.

Every field is independently optional.  ``None`` means that the caller did not
add the option, which matters for ``timeout`` and ``max_retries``: their
defaults are applied only to omitted values, an explicit ``0`` is kept.

The numeric fields are not bounded here: out of range values are clamped by
:class:`~llm_connector_lib.services.request_resolver.RequestConfigResolver`
and reported.  Enumerated fields are plain strings, unknown values are
dropped by the resolver with a diagnostic.
"""

from typing import Optional

from pydantic import Field

from llm_connector_lib.data_models.base_model import HostInputModel
from llm_connector_lib.data_models.constants import (
    DEFAULT_REASONING_EFFORT,
    RESPONSE_FORMAT_TEXT,
)


class RequestOptions(HostInputModel):
    """
    Attributes
    ----------
    base_url : Optional[str]
        Overrides the base URL stored in the credentials.
    frequency_penalty : Optional[float]
        Range ``[-2, 2]``.
    max_tokens : Optional[int]
        At most ``32768``; a negative value (the host uses ``-1``) means
        "no limit" and is omitted from the request.
    max_retries : Optional[int]
        Defaults to ``2`` when omitted.
    timeout : Optional[int]
        Milliseconds, defaults to ``60000`` when omitted.
    presence_penalty : Optional[float]
        Range ``[-2, 2]``.
    temperature : Optional[float]
        Range ``[0, 2]``.
    top_p : Optional[float]
        Range ``[0, 1]``.
    response_format : str, default ``"text"``
        ``"text"`` or ``"json_object"``.
    reasoning_effort : str, default ``"medium"``
        ``"low"``, ``"medium"`` or ``"high"``; sent only to reasoning models.
    """

    base_url: Optional[str] = Field(default=None, alias="baseURL")
    frequency_penalty: Optional[float] = Field(default=None, alias="frequencyPenalty")
    max_tokens: Optional[int] = Field(default=None, alias="maxTokens")
    max_retries: Optional[int] = Field(default=None, alias="maxRetries")
    timeout: Optional[int] = None
    presence_penalty: Optional[float] = Field(default=None, alias="presencePenalty")
    temperature: Optional[float] = None
    top_p: Optional[float] = Field(default=None, alias="topP")
    response_format: Optional[str] = Field(
        default=RESPONSE_FORMAT_TEXT, alias="responseFormat"
    )
    reasoning_effort: Optional[str] = Field(
        default=DEFAULT_REASONING_EFFORT, alias="reasoningEffort"
    )
