# Tests for chat request validation (body -> ChatRequest).

import json

import pytest

from app.api.deps import validate_chat_request
from app.core.errors import ValidationError
from app.schemas.chat import ChatMessage, ChatRequest


def _body(**fields) -> bytes:
    return json.dumps(fields).encode("utf-8")


def _violations(body: bytes) -> list:
    with pytest.raises(ValidationError) as exc_info:
        validate_chat_request(body)
    return exc_info.value.violations


USER_HI = [{"role": "user", "content": "hi"}]


class TestDefaults:
    def test_model_and_stream_defaults(self):
        req = validate_chat_request(_body(messages=USER_HI))
        assert req.model == "Qwen/Qwen2.5-7B-Instruct"
        assert req.stream is True
        assert req.temperature is None
        assert req.max_tokens is None
        assert req.top_p is None

    def test_explicit_values_kept(self):
        req = validate_chat_request(
            _body(
                model="Qwen/Qwen3-8B",
                messages=USER_HI,
                stream=False,
                temperature=2,
                max_tokens=4000,
                top_p=0,
            )
        )
        assert req.model == "Qwen/Qwen3-8B"
        assert req.stream is False
        assert req.temperature == 2
        assert req.max_tokens == 4000
        assert req.top_p == 0

    def test_unknown_fields_ignored(self):
        req = validate_chat_request(_body(messages=USER_HI, user="abc"))
        assert not hasattr(req, "user")

    def test_messages_keep_order(self):
        msgs = [
            {"role": "system", "content": "be brief"},
            {"role": "user", "content": "hi"},
            {"role": "assistant", "content": "hello"},
        ]
        req = validate_chat_request(_body(messages=msgs))
        assert [m.role for m in req.messages] == ["system", "user", "assistant"]


class TestMessages:
    def test_missing_messages(self):
        violations = _violations(_body(model="x"))
        assert any(v.startswith("messages:") for v in violations)

    def test_empty_messages_mentions_minimum(self):
        violations = _violations(_body(messages=[]))
        assert violations == ["messages: 至少需要一条消息"]

    @pytest.mark.parametrize("role", ["tool", "USER", "", None])
    def test_role_outside_enum(self, role):
        violations = _violations(_body(messages=[{"role": role, "content": "hi"}]))
        assert any(v.startswith("messages.0.role:") for v in violations)

    def test_empty_content(self):
        violations = _violations(_body(messages=[{"role": "user", "content": ""}]))
        assert violations == ["messages.0.content: 消息内容不能为空"]

    def test_message_is_immutable(self):
        msg = ChatMessage(role="user", content="hi")
        with pytest.raises(Exception):
            msg.content = "changed"


class TestNumericRanges:
    @pytest.mark.parametrize("value", [-0.1, 2.01])
    def test_temperature_out_of_range(self, value):
        violations = _violations(_body(messages=USER_HI, temperature=value))
        assert any(v.startswith("temperature:") for v in violations)

    @pytest.mark.parametrize("value", [0, 4001, 1.5])
    def test_max_tokens_invalid(self, value):
        violations = _violations(_body(messages=USER_HI, max_tokens=value))
        assert any(v.startswith("max_tokens:") for v in violations)

    @pytest.mark.parametrize("value", [-0.5, 1.01])
    def test_top_p_out_of_range(self, value):
        violations = _violations(_body(messages=USER_HI, top_p=value))
        assert any(v.startswith("top_p:") for v in violations)

    @pytest.mark.parametrize(
        "field,value",
        [
            ("temperature", "1.5"),
            ("temperature", None),
            ("temperature", True),
            ("max_tokens", "100"),
            ("max_tokens", 100.0),
            ("max_tokens", None),
            ("top_p", True),
            ("top_p", "0.5"),
            ("top_p", None),
        ],
    )
    def test_non_numeric_values_rejected(self, field, value):
        violations = _violations(_body(messages=USER_HI, **{field: value}))
        assert any(v.startswith(f"{field}:") for v in violations)

    def test_integer_accepted_for_float_fields(self):
        req = validate_chat_request(_body(messages=USER_HI, temperature=1, top_p=1))
        assert req.temperature == 1
        assert req.top_p == 1


class TestMalformedBodies:
    def test_stream_must_be_boolean(self):
        violations = _violations(_body(messages=USER_HI, stream="true"))
        assert any(v.startswith("stream:") for v in violations)

    def test_invalid_json(self):
        assert _violations(b"{not json") != []

    def test_empty_body(self):
        assert _violations(b"") != []

    def test_non_object_body(self):
        assert _violations(b"[1, 2, 3]") != []

    def test_every_violation_reported(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_chat_request(
                _body(messages=[{"role": "bot", "content": ""}], temperature=5, top_p=-1)
            )
        err = exc_info.value
        assert len(err.violations) == 4
        assert err.message == "; ".join(err.violations)


class TestCompletionParams:
    def test_unset_optionals_not_sent(self):
        req = ChatRequest(messages=[ChatMessage(role="user", content="hi")])
        params = req.completion_params()
        assert params == {
            "model": "Qwen/Qwen2.5-7B-Instruct",
            "messages": [{"role": "user", "content": "hi"}],
            "stream": True,
        }

    def test_set_optionals_sent(self):
        req = ChatRequest(
            messages=[ChatMessage(role="user", content="hi")],
            temperature=0.3,
            max_tokens=64,
            top_p=0.9,
        )
        params = req.completion_params()
        assert params["temperature"] == 0.3
        assert params["max_tokens"] == 64
        assert params["top_p"] == 0.9
