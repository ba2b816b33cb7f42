"""
Final request configuration handed over to the chat model client.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from llm_connector_lib.data_models.diagnostics import Diagnostic

MASKED_SECRET = "***"


class ResolvedRequestConfig(BaseModel):
    """
    Fully defaulted and validated configuration of one chat completion client.

    Attributes
    ----------
    api_key : str
        Secret key (excluded from ``repr``).
    base_url : str
        Effective base URL after options / credentials / default precedence.
    organization : Optional[str]
        Organisation id taken from the credentials.
    model : str
        Resolved model name, never empty.
    metadata : Dict[str, Any]
        Normalized metadata, possibly empty.
    extra_body : Optional[Dict[str, Any]]
        ``{"metadata": ...}`` envelope; ``None`` when there is no metadata.
    model_kwargs : Dict[str, Any]
        Extra request fields: ``response_format``, ``reasoning_effort`` and a
        copy of ``extra_body``.
    timeout : int
        Request timeout in milliseconds.
    max_retries : int
        Retries performed by the chat model client.
    frequency_penalty, presence_penalty, temperature, top_p, max_tokens
        Clamped numeric options, ``None`` when not set.
    diagnostics : List[Diagnostic]
        Anomalies absorbed while resolving.
    """

    model_config = ConfigDict(protected_namespaces=(), frozen=True)

    api_key: str = Field(repr=False)
    base_url: str
    organization: Optional[str] = None
    model: str
    metadata: Dict[str, Any] = {}
    extra_body: Optional[Dict[str, Any]] = None
    model_kwargs: Dict[str, Any] = {}
    timeout: int
    max_retries: int

    frequency_penalty: Optional[float] = None
    presence_penalty: Optional[float] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    max_tokens: Optional[int] = None

    diagnostics: List[Diagnostic] = []

    def to_payload(
        self, mask_api_key: bool = True, with_diagnostics: bool = False
    ) -> Dict[str, Any]:
        """
        Dump the configuration as a plain dictionary.

        Unset values are left out, so a configuration without metadata has
        no ``extra_body`` key at all.

        Parameters
        ----------
        mask_api_key : bool, default ``True``
            Replace the key with ``***``.
        with_diagnostics : bool, default ``False``
            Include the ``diagnostics`` list.

        Returns
        -------
        Dict[str, Any]
            JSON serialisable mapping.
        """
        exclude = None if with_diagnostics else {"diagnostics"}
        payload = {
            k: v for k, v in self.model_dump(exclude=exclude).items() if v is not None
        }
        if mask_api_key:
            payload["api_key"] = MASKED_SECRET
        return payload
