import json

import pytest
import requests

from healthsync.clients.ai_chat import AiChatClient, FALLBACK_ANSWER
from healthsync.errors import AiServiceError
from healthsync.models import ChatMessage, UserActionLog
from healthsync.services.chat import bmi, bmi_status, bmr


def ask(client, headers, question):
    return client.post("/api/chat/ask", json={"question": question}, headers=headers)


def test_ask_persists_question_and_answer(client, customer, auth_headers, ai_chat):
    response = ask(client, auth_headers, "How much protein should I eat?")
    assert response.status_code == 200
    body = response.get_json()
    assert body["response"] == ai_chat.answer
    assert body["message_id"]

    messages = ChatMessage.query.filter_by(user_id=customer.id).order_by(ChatMessage.id).all()
    assert [m.role for m in messages] == ["user", "assistant"]
    assert messages[0].content == "How much protein should I eat?"
    assert messages[1].id == body["message_id"]

    context = json.loads(messages[0].context_data)
    assert context["profile"]["full_name"] == "Casey Customer"
    assert UserActionLog.query.filter_by(user_id=customer.id, action_type="chat_asked").count() == 1


def test_system_prompt_carries_user_data(client, auth_headers, ai_chat):
    client.post("/api/goals", json={"type": "weight_loss", "target_value": 70, "start_date": "2026-01-01"},
                headers=auth_headers)
    ask(client, auth_headers, "Am I on track?")

    system_prompt, question = ai_chat.calls[-1]
    assert question == "Am I on track?"
    assert "USER DATA" in system_prompt
    assert "weight_loss" in system_prompt
    assert "goal_created" in system_prompt
    assert "Chicken Breast" in system_prompt


def test_blank_question_is_rejected(client, auth_headers):
    assert ask(client, auth_headers, "").status_code == 400
    assert ask(client, auth_headers, "   ").status_code == 400
    assert ChatMessage.query.count() == 0


def test_ai_failure_returns_503_and_stores_nothing(client, customer, auth_headers, ai_chat):
    ai_chat.fail = True
    response = ask(client, auth_headers, "Hello?")
    assert response.status_code == 503
    assert ChatMessage.query.count() == 0
    assert UserActionLog.query.filter_by(user_id=customer.id, action_type="chat_asked").count() == 0


def test_history_is_ascending(client, auth_headers):
    ask(client, auth_headers, "first")
    ask(client, auth_headers, "second")

    body = client.get("/api/chat/history", headers=auth_headers).get_json()
    assert body["total"] == 4
    assert [m["role"] for m in body["items"]] == ["user", "assistant", "user", "assistant"]
    assert body["items"][0]["content"] == "first"


def test_history_first_page_is_newest(client, auth_headers):
    ask(client, auth_headers, "first")
    ask(client, auth_headers, "second")

    body = client.get("/api/chat/history?page=1&page_size=2", headers=auth_headers).get_json()
    assert [m["content"] for m in body["items"]][0] == "second"
    assert body["pages"] == 2


def test_history_is_private(client, auth_headers, other_customer, headers_for):
    ask(client, auth_headers, "mine")
    body = client.get("/api/chat/history", headers=headers_for(other_customer)).get_json()
    assert body["items"] == []


def test_body_metrics():
    assert bmi(80, 180) == 24.7
    assert bmi_status(24.7) == "Normal"
    assert bmi_status(31) == "Obese"
    assert bmi(None, 180) is None
    # 10*80 + 6.25*180 - 5*30 + 5
    assert bmr(80, 180, 30, "Male") == 1780
    assert bmr(60, 165, 30, "Female") == 1320


class FakeResponse:
    def __init__(self, payload, status=200):
        self.payload = payload
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} error")

    def json(self):
        return self.payload


def test_ai_client_posts_openai_format(monkeypatch):
    seen = {}

    def fake_post(url, json=None, headers=None, timeout=None):
        seen.update(url=url, json=json, headers=headers)
        return FakeResponse({"choices": [{"message": {"content": "Eat more greens."}}]})

    monkeypatch.setattr("healthsync.clients.ai_chat.requests.post", fake_post)
    client = AiChatClient("https://ai.test/v1/", "key-1", "some-model")

    assert client.complete("system", "question") == "Eat more greens."
    assert seen["url"] == "https://ai.test/v1/chat/completions"
    assert seen["headers"]["Authorization"] == "Bearer key-1"
    assert seen["json"]["model"] == "some-model"
    assert [m["role"] for m in seen["json"]["messages"]] == ["system", "user"]


def test_ai_client_empty_answer_falls_back(monkeypatch):
    monkeypatch.setattr("healthsync.clients.ai_chat.requests.post",
                        lambda *args, **kwargs: FakeResponse({"choices": []}))
    assert AiChatClient("https://ai.test/v1", "key", "m").complete("s", "q") == FALLBACK_ANSWER


def test_ai_client_http_error(monkeypatch):
    monkeypatch.setattr("healthsync.clients.ai_chat.requests.post",
                        lambda *args, **kwargs: FakeResponse({}, status=500))
    with pytest.raises(AiServiceError):
        AiChatClient("https://ai.test/v1", "key", "m").complete("s", "q")


def test_ai_client_requires_api_key():
    with pytest.raises(AiServiceError):
        AiChatClient("https://ai.test/v1", "", "m").complete("s", "q")
