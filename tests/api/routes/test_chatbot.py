from fastapi.testclient import TestClient

from appointme.api.deps import get_text_generator
from appointme.chatbot import responses
from appointme.core.config import settings
from appointme.main import app


class StubGenerator:
    def __init__(self, answer: str):
        self.answer = answer
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.answer


def test_message_without_api_key(client: TestClient) -> None:
    response = client.post(
        f"{settings.API_V1_STR}/chatbot/message", json={"message": "How do I book a service?"}
    )

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": responses.BOOKING,
        "type": "fallback_no_api_key",
    }


def test_message_with_generator(client: TestClient) -> None:
    stub = StubGenerator("You can book from any service page.")
    app.dependency_overrides[get_text_generator] = lambda: stub
    try:
        response = client.post(
            f"{settings.API_V1_STR}/chatbot/message", json={"message": "How do I pay?"}
        )
    finally:
        app.dependency_overrides.pop(get_text_generator)

    assert response.json()["type"] == "ai"
    assert response.json()["message"] == "You can book from any service page."
    assert "User Question: How do I pay?" in stub.prompts[0]


def test_empty_message_is_rejected(client: TestClient) -> None:
    response = client.post(f"{settings.API_V1_STR}/chatbot/message", json={"message": ""})
    assert response.status_code == 422


def test_simple_message(client: TestClient) -> None:
    response = client.post(f"{settings.API_V1_STR}/chatbot/simple", json={"message": "hello"})
    assert response.json()["message"] == responses.GREETING
    assert response.json()["type"] == "fallback_response"


def test_quick_responses_and_faqs(client: TestClient) -> None:
    quick = client.get(f"{settings.API_V1_STR}/chatbot/quick-responses").json()
    assert quick["quick_responses"] == responses.QUICK_RESPONSES

    faqs = client.get(f"{settings.API_V1_STR}/chatbot/faqs").json()
    assert faqs["faqs"] == responses.FAQS


def test_chatbot_status(client: TestClient) -> None:
    data = client.get(f"{settings.API_V1_STR}/chatbot/test").json()
    assert data["api_key_configured"] is False
    assert data["model"] == settings.GEMINI_MODEL
