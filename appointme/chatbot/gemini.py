import httpx

from appointme.core.exceptions import ExternalServiceError


class GeminiClient:
    """
    Text generation over the Gemini `generateContent` REST endpoint.
    Every failure is raised as ExternalServiceError with a reason of
    `api_failed`, `network_error` or `general_error`.
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    @property
    def url(self) -> str:
        return f"{self.base_url}/{self.model}:generateContent"

    def _payload(self, prompt: str) -> dict:
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": 0.7,
                "topK": 40,
                "topP": 0.95,
                "maxOutputTokens": 1024,
            },
        }

    async def generate(self, prompt: str) -> str:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    self.url,
                    params={"key": self.api_key},
                    json=self._payload(prompt),
                    headers={"Content-Type": "application/json"},
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise ExternalServiceError("api_failed", f"status {e.response.status_code}") from e
        except httpx.RequestError as e:
            raise ExternalServiceError("network_error", str(e)) from e
        except Exception as e:
            raise ExternalServiceError("general_error", str(e)) from e

        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            raise ExternalServiceError("api_failed", "response has no candidate text") from e
        if not isinstance(text, str) or not text.strip():
            raise ExternalServiceError("api_failed", "empty candidate text")
        return text.strip()
