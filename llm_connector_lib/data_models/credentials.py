"""
Credentials of an OpenAI compatible API served through a LiteLLM gateway.

The credentials are owned by the host credential store; the connector only
reads them.  ``api_key`` is declared optional here so that a missing key is
reported by the resolver as a :class:`~llm_connector_lib.exceptions.ConfigurationError`
instead of a pydantic validation error.
"""

from typing import Optional

from pydantic import ConfigDict, Field

from llm_connector_lib.data_models.base_model import HostInputModel
from llm_connector_lib.data_models.constants import DEFAULT_BASE_URL


class Credentials(HostInputModel):
    """
    Attributes
    ----------
    api_key : str
        Secret key sent as ``Authorization: Bearer <key>``.  Excluded from
        ``repr`` so it never shows up in log lines.
    organization_id : Optional[str]
        Sent as ``OpenAI-Organization``; only needed for users that belong
        to multiple organisations.
    url : Optional[str], default ``DEFAULT_BASE_URL``
        Base URL of the API (the LiteLLM gateway, e.g. ``http://litellm:4000``).
    """

    model_config = ConfigDict(frozen=True)

    api_key: Optional[str] = Field(default=None, alias="apiKey", repr=False)
    organization_id: Optional[str] = Field(default=None, alias="organizationId")
    url: Optional[str] = DEFAULT_BASE_URL
