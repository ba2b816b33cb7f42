"""
Gateway compatibility shims.

The LiteLLM gateway reads the trace metadata from ``extra_body`` but some
client/proxy combinations drop non‑standard top‑level fields on the way.  The
metadata envelope is therefore written to two places at once.
"""

from typing import Any, Dict, Optional, Tuple

EXTRA_BODY_FIELD = "extra_body"
MODEL_KWARGS_FIELD = "model_kwargs"

# model_kwargs entries that the langchain ChatOpenAI client only accepts as
# explicit constructor parameters
EXPLICIT_CLIENT_PARAMS = ("reasoning_effort", "extra_body")


def attach_extra_body(
    config: Dict[str, Any], extra_body: Optional[Dict[str, Any]]
) -> Dict[str, Any]:
    """
    Write ``extra_body`` to ``config["extra_body"]`` and to
    ``config["model_kwargs"]["extra_body"]``.

    Nothing is written when ``extra_body`` is empty.  ``model_kwargs`` is
    replaced by a new dictionary, the caller's one is left untouched.
    """
    if not extra_body:
        return config
    config[EXTRA_BODY_FIELD] = extra_body
    config[MODEL_KWARGS_FIELD] = {
        **config.get(MODEL_KWARGS_FIELD, {}),
        EXTRA_BODY_FIELD: extra_body,
    }
    return config


def split_explicit_client_params(
    model_kwargs: Dict[str, Any],
) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """
    Split ``model_kwargs`` into entries that stay in ``model_kwargs`` and
    entries that must become explicit client parameters.

    Returns
    -------
    Tuple[Dict[str, Any], Dict[str, Any]]
        ``(model_kwargs, explicit_params)``
    """
    remaining = {}
    explicit = {}
    for name, value in model_kwargs.items():
        if name in EXPLICIT_CLIENT_PARAMS:
            explicit[name] = value
        else:
            remaining[name] = value
    return remaining, explicit
