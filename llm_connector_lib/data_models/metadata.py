"""
Models of the metadata side channel.

``RawMetadataInput`` is what the host collects in the *JSON Metadata* section
of the node; ``NormalizedMetadata`` is the outcome of
:class:`~llm_connector_lib.services.metadata_normalizer.MetadataNormalizer`.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from llm_connector_lib.data_models.base_model import HostInputModel
from llm_connector_lib.data_models.diagnostics import Diagnostic


class RawMetadataInput(HostInputModel):
    """
    Attributes
    ----------
    session_id : Any
        Used for trace grouping and session management.  Workflow expressions
        may produce numbers, any non empty value is kept as given.
    user_id : Any
        Used for trace attribution, same rules as ``session_id``.
    custom_metadata : str | mapping | None
        Free form metadata, either as JSON text or as an already structured
        mapping.  Any other value is kept under the ``_raw`` key.
    """

    session_id: Any = Field(default=None, alias="sessionId")
    user_id: Any = Field(default=None, alias="userId")
    custom_metadata: Any = Field(default=None, alias="customMetadata")


class NormalizedMetadata(BaseModel):
    """
    Attributes
    ----------
    metadata : Dict[str, Any]
        Final key/value metadata bag, always a mapping.
    extra_body : Optional[Dict[str, Any]]
        ``{"metadata": metadata}`` envelope for the gateway, ``None`` when
        ``metadata`` is empty.
    diagnostics : List[Diagnostic]
        Parse fallbacks recorded during normalization.
    """

    metadata: Dict[str, Any] = {}
    extra_body: Optional[Dict[str, Any]] = None
    diagnostics: List[Diagnostic] = []
