"""
Factory of the LangChain ``ChatOpenAI`` client from a resolved configuration.

From here on the client owns all network I/O, retries and streaming; errors
it raises (transport, authentication, rate limits) are not translated.
"""

from typing import Any, Dict, List, Optional

from langchain_core.callbacks import BaseCallbackHandler
from langchain_openai import ChatOpenAI

from llm_connector_lib.data_models.resolved_config import ResolvedRequestConfig
from llm_connector_lib.services.compat import split_explicit_client_params

_SAMPLING_PARAMS = (
    "temperature",
    "top_p",
    "frequency_penalty",
    "presence_penalty",
    "max_tokens",
)


def chat_model_kwargs(config: ResolvedRequestConfig) -> Dict[str, Any]:
    """
    Map the configuration onto ``ChatOpenAI`` constructor arguments.

    ``timeout`` is converted from milliseconds to seconds.  ``model_kwargs``
    entries that ``ChatOpenAI`` only accepts as explicit parameters
    (``reasoning_effort``, ``extra_body``) are passed as such.
    """
    model_kwargs, explicit = split_explicit_client_params(config.model_kwargs)
    kwargs: Dict[str, Any] = {
        "model": config.model,
        "api_key": config.api_key,
        "base_url": config.base_url,
        "timeout": config.timeout / 1000.0,
        "max_retries": config.max_retries,
        "metadata": config.metadata,
        "model_kwargs": model_kwargs,
    }
    if config.organization:
        kwargs["organization"] = config.organization

    for name in _SAMPLING_PARAMS:
        value = getattr(config, name)
        if value is not None:
            kwargs[name] = value

    kwargs.update(explicit)
    if config.extra_body is not None:
        kwargs["extra_body"] = config.extra_body
    return kwargs


def build_chat_model(
    config: ResolvedRequestConfig,
    callbacks: Optional[List[BaseCallbackHandler]] = None,
) -> ChatOpenAI:
    kwargs = chat_model_kwargs(config)
    if callbacks:
        kwargs["callbacks"] = list(callbacks)
    return ChatOpenAI(**kwargs)
