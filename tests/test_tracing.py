import logging
from uuid import uuid4

from langchain_core.language_models import FakeListChatModel
from langchain_core.messages import HumanMessage
from langchain_core.outputs import Generation, LLMResult

from llm_connector_lib.services.tracing import MetadataTracingHandler

METADATA = {"env": "dev", "sessionId": "s-1"}


def test_run_is_recorded():
    handler = MetadataTracingHandler(METADATA, item_index=3)
    run_id = uuid4()
    handler.on_chat_model_start(
        {},
        [[HumanMessage(content="hello")]],
        run_id=run_id,
        invocation_params={"model": "gpt-4o"},
    )
    handler.on_llm_end(
        LLMResult(
            generations=[[Generation(text="hi there")]],
            llm_output={"token_usage": {"total_tokens": 7}},
        ),
        run_id=run_id,
    )
    run = handler.runs[run_id]
    assert run["model"] == "gpt-4o"
    assert run["prompts"] == ["Human: hello"]
    assert run["response"] == [["hi there"]]
    assert run["token_usage"] == {"total_tokens": 7}
    assert run["metadata"] is METADATA


def test_error_is_recorded(caplog):
    handler = MetadataTracingHandler(METADATA)
    run_id = uuid4()
    handler.on_llm_start({}, ["prompt"], run_id=run_id)
    with caplog.at_level(logging.ERROR):
        handler.on_llm_error(RuntimeError("gateway down"), run_id=run_id)
    assert handler.runs[run_id]["error"] == "gateway down"
    assert "gateway down" in caplog.text


def test_handler_follows_a_chat_model_call(caplog):
    handler = MetadataTracingHandler(METADATA, logger=logging.getLogger("tracing-test"))
    chat = FakeListChatModel(responses=["ok"], callbacks=[handler])
    with caplog.at_level(logging.INFO, logger="tracing-test"):
        assert chat.invoke("ping").content == "ok"

    assert len(handler.runs) == 1
    run = next(iter(handler.runs.values()))
    assert run["prompts"] == ["Human: ping"]
    assert run["response"] == [["ok"]]
    assert "'env': 'dev'" in caplog.text
    assert METADATA == {"env": "dev", "sessionId": "s-1"}
