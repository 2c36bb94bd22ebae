import pytest

from authrelay import llm_groq


class _FakeResponse:
    def __init__(self, status_code, data=None, text=""):
        self.status_code = status_code
        self._data = data
        self.text = text

    def json(self):
        return self._data


@pytest.fixture
def captured(monkeypatch):
    calls = {}

    def fake_post(url, headers=None, json=None, timeout=None):
        calls.update(url=url, headers=headers, json=json, timeout=timeout)
        return calls.get("response")

    monkeypatch.setattr(llm_groq.requests, "post", fake_post)
    return calls


def test_generator_sends_system_and_user_messages(captured):
    captured["response"] = _FakeResponse(200, {"choices": [{"message": {"content": "  hi there \n"}}]})
    generate = llm_groq.make_groq_generator("key-123", "some-model", timeout=5)

    assert generate("be nice", "hello") == "hi there"
    assert captured["url"] == llm_groq.GROQ_URL
    assert captured["timeout"] == 5
    assert captured["headers"]["Authorization"] == "Bearer key-123"
    assert captured["json"]["model"] == "some-model"
    assert captured["json"]["messages"] == [
        {"role": "system", "content": "be nice"},
        {"role": "user", "content": "hello"},
    ]


def test_non_200_raises(captured):
    captured["response"] = _FakeResponse(503, text="overloaded")
    with pytest.raises(RuntimeError, match="503"):
        llm_groq.groq_answer("key", "m", "sys", "msg")


def test_unexpected_shape_raises(captured):
    captured["response"] = _FakeResponse(200, {"error": "nope"})
    with pytest.raises(RuntimeError, match="Unexpected"):
        llm_groq.groq_answer("key", "m", "sys", "msg")


def test_missing_key_raises_before_request(captured):
    with pytest.raises(RuntimeError, match="GROQ_API_KEY"):
        llm_groq.groq_answer("", "m", "sys", "msg")
    assert "url" not in captured
