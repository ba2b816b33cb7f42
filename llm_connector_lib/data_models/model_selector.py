"""
Model selection across node schema versions.

Nodes older than version ``1.2`` store the model as a plain name, newer nodes
store a resource locator ``{"mode": "list" | "id", "value": "<name>"}``.  Both
shapes are represented by a tagged union, :data:`ModelSelector`, and each
variant reduces to a single model name through :meth:`resolved_name`.

:func:`build_model_selector` is the only place where the schema version is
compared; the rest of the library works on the union.
"""

from typing import Any, Literal, Mapping, Union

from pydantic import BaseModel, ConfigDict

from llm_connector_lib.data_models.constants import MODEL_LOCATOR_MIN_VERSION


class PlainModelName(BaseModel):
    """Model given directly by its name (schema version < 1.2)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["plain"] = "plain"
    name: str = ""

    def resolved_name(self) -> str:
        return self.name.strip()


class ModelLocator(BaseModel):
    """
    Resource locator (schema version >= 1.2).

    ``mode`` tells whether the value was picked from the discovered list or
    typed in as an id.  It is informational only: both modes resolve to
    ``value``.  Extra keys stored by the host (``__rl``, ``cachedResultName``)
    are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    kind: Literal["locator"] = "locator"
    mode: str = "list"
    value: str = ""

    def resolved_name(self) -> str:
        return self.value.strip()


ModelSelector = Union[PlainModelName, ModelLocator]


def uses_model_locator(schema_version: float) -> bool:
    return float(schema_version) >= MODEL_LOCATOR_MIN_VERSION


def _as_name(raw: Any) -> str:
    return "" if raw is None else str(raw)


def build_model_selector(raw: Any, schema_version: float) -> ModelSelector:
    """
    Build the selector variant expected by ``schema_version``.

    Parameters
    ----------
    raw : Any
        Model input as stored by the host: a name, a locator mapping or an
        already built selector.
    schema_version : float
        Node schema version.

    Returns
    -------
    ModelSelector
        ``ModelLocator`` for versions ``>= 1.2``, ``PlainModelName`` otherwise.
        Input of the other shape is folded into the expected variant.

    Raises
    ------
    ValueError
        If ``schema_version`` is not a number.
    pydantic.ValidationError
        If a locator mapping carries a non textual value.
    """
    if uses_model_locator(schema_version):
        if isinstance(raw, ModelLocator):
            return raw
        if isinstance(raw, PlainModelName):
            return ModelLocator(mode="id", value=raw.name)
        if isinstance(raw, Mapping):
            return ModelLocator.model_validate(dict(raw))
        return ModelLocator(mode="id", value=_as_name(raw))

    if isinstance(raw, PlainModelName):
        return raw
    if isinstance(raw, ModelLocator):
        return PlainModelName(name=raw.value)
    if isinstance(raw, Mapping):
        return PlainModelName(name=_as_name(raw.get("value")))
    return PlainModelName(name=_as_name(raw))
