import json

import pytest

from chatplus.chat_types import (
    MODEL_TO_TOKENS,
    ApiRequest,
    ChatModel,
    ChatSession,
    Function,
    Message,
    ToolCall,
    get_model_max_token,
)


def test_known_model_tokens():
    assert get_model_max_token("gpt-4") == 8192
    assert get_model_max_token("gpt-4-32k") == 32768


def test_unknown_model_falls_back():
    assert get_model_max_token("no-such-model") == 4096


@pytest.mark.parametrize("model", sorted(MODEL_TO_TOKENS))
def test_every_listed_model_uses_its_table_entry(model):
    assert get_model_max_token(model) == MODEL_TO_TOKENS[model]


def test_empty_request_keeps_only_required_fields():
    assert ApiRequest().to_dict() == {"temperature": 0.0, "stream": False}


def test_request_serialises_messages():
    req = ApiRequest(
        model="gpt-4",
        temperature=0.5,
        max_tokens=100,
        stream=True,
        messages=[Message(role="user", content="hi"), {"role": "user", "content": "x"}],
    )
    body = req.to_dict()
    assert body["model"] == "gpt-4"
    assert body["max_tokens"] == 100
    assert body["messages"][0] == {"role": "user", "content": "hi"}
    assert body["messages"][1] == {"role": "user", "content": "x"}
    assert "prompt" not in body
    assert "tools" not in body
    assert json.loads(json.dumps(body)) == body


def test_request_serialises_tools():
    fn = Function(name="weibo", description="hot list")
    req = ApiRequest(tools=[{"type": "function", "function": fn}], tool_choice="auto")
    body = req.to_dict()
    assert body["tool_choice"] == "auto"
    assert body["tools"][0]["function"]["name"] == "weibo"
    assert body["tools"][0]["function"]["parameters"] == fn.parameters


def test_tool_call_fields_round_trip_through_request():
    call = ToolCall(type="function", name="zaobao", arguments="{}")
    body = ApiRequest(messages=[call]).to_dict()
    assert body["messages"] == [{"type": "function", "name": "zaobao", "arguments": "{}"}]


def test_session_model_defaults_are_independent():
    a = ChatSession(session_id="a")
    b = ChatSession(session_id="b")
    a.model.weight = 3
    assert b.model == ChatModel()