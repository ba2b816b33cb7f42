"""
Base model definitions for the LLM connector library.

The workflow host hands its values over with camelCase keys (``apiKey``,
``customMetadata``, ``baseURL`` ...).  Models derived from
:class:`HostInputModel` accept both those host keys and the Python field
names, and silently ignore keys they do not know.
"""

from pydantic import BaseModel, ConfigDict


class HostInputModel(BaseModel):
    """
    Common configuration of every model that is built from host input.

    Fields declare the host key as ``alias``; ``populate_by_name`` allows the
    Python field name to be used as well.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")
