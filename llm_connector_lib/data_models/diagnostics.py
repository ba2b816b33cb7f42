"""
Diagnostics collected while the request configuration is being resolved.

A diagnostic never aborts the resolution.  It records an anomaly that was
absorbed into the produced configuration, so that an operator can find out
afterwards why a value differs from what was entered.
"""

from typing import Any

from pydantic import BaseModel


class DiagnosticKind:
    METADATA_PARSE_FALLBACK = "metadata_parse_fallback"
    OPTION_CLAMPED = "option_clamped"
    OPTION_DROPPED = "option_dropped"
    MODEL_SELECTOR_COERCED = "model_selector_coerced"


class Diagnostic(BaseModel):
    """
    Single recorded anomaly.

    Attributes
    ----------
    kind : str
        One of the :class:`DiagnosticKind` values.
    field : str
        Name of the input field the anomaly concerns.
    message : str
        Human‑readable description.
    original : Any
        Value supplied by the caller.
    value : Any
        Value that was used instead (``None`` when the field was dropped).
    """

    kind: str
    field: str
    message: str
    original: Any = None
    value: Any = None
