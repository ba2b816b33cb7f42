"""
LangChain callback that follows the chat model calls of one node execution.

The handler carries the normalized metadata unmodified, logs each request
together with that metadata and keeps the request/response pairs it has
seen, so an operator can check what was sent and what came back.
"""

import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from langchain_core.callbacks import BaseCallbackHandler
from langchain_core.messages import BaseMessage, get_buffer_string
from langchain_core.outputs import LLMResult


class MetadataTracingHandler(BaseCallbackHandler):
    """
    Parameters
    ----------
    metadata : Dict[str, Any]
        Normalized metadata of the request.
    item_index : int, default ``0``
        Index of the processed workflow item, used in log lines.
    logger : Optional[logging.Logger]
        Logger instance; if omitted, a module‑level logger is used.
    """

    def __init__(
        self,
        metadata: Dict[str, Any],
        item_index: int = 0,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.metadata = metadata
        self.item_index = item_index
        self.logger = logger or logging.getLogger(__name__)
        self.runs: Dict[UUID, Dict[str, Any]] = {}

    def _start_run(self, run_id: UUID, prompts: List[str], **kwargs: Any) -> None:
        invocation_params = kwargs.get("invocation_params") or {}
        model = invocation_params.get("model") or invocation_params.get("model_name")
        self.runs[run_id] = {
            "model": model,
            "prompts": prompts,
            "metadata": self.metadata,
            "response": None,
            "token_usage": None,
            "error": None,
        }
        self.logger.info(
            "[item %d] LLM request to %s with metadata %s",
            self.item_index,
            model,
            self.metadata,
        )

    def on_chat_model_start(
        self,
        serialized: Dict[str, Any],
        messages: List[List[BaseMessage]],
        *,
        run_id: UUID,
        **kwargs: Any,
    ) -> None:
        self._start_run(run_id, [get_buffer_string(m) for m in messages], **kwargs)

    def on_llm_start(
        self,
        serialized: Dict[str, Any],
        prompts: List[str],
        *,
        run_id: UUID,
        **kwargs: Any,
    ) -> None:
        self._start_run(run_id, list(prompts), **kwargs)

    def on_llm_end(self, response: LLMResult, *, run_id: UUID, **kwargs: Any) -> None:
        run = self.runs.setdefault(run_id, {"metadata": self.metadata})
        run["response"] = [[g.text for g in gens] for gens in response.generations]
        run["token_usage"] = (response.llm_output or {}).get("token_usage")
        self.logger.info(
            "[item %d] LLM response received, token usage: %s",
            self.item_index,
            run["token_usage"],
        )

    def on_llm_error(
        self, error: BaseException, *, run_id: UUID, **kwargs: Any
    ) -> None:
        run = self.runs.setdefault(run_id, {"metadata": self.metadata})
        run["error"] = str(error)
        self.logger.error("[item %d] LLM request failed: %s", self.item_index, error)
