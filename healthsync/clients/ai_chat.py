import logging

import requests

from healthsync.errors import AiServiceError

logger = logging.getLogger(__name__)

FALLBACK_ANSWER = "Sorry, I can't answer your question right now. Please try again later."


class AiChatClient:
    """Client for an OpenAI compatible chat completion endpoint."""

    def __init__(self, base_url, api_key, model, timeout=60):
        self.base_url = (base_url or "").rstrip("/")
        self.api_key = api_key
        self.model = model
        self.timeout = timeout

    @classmethod
    def from_config(cls, config):
        return cls(
            config.get("AI_CHAT_BASE_URL"),
            config.get("AI_CHAT_API_KEY"),
            config.get("AI_CHAT_MODEL"),
            config.get("AI_CHAT_TIMEOUT", 60),
        )

    def complete(self, system_prompt, question):
        if not self.api_key or not self.base_url:
            raise AiServiceError("AI chat service is not configured")

        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": question},
            ],
            "max_completion_tokens": 8192,
            "temperature": 1,
            "top_p": 1,
            "stream": False,
        }
        try:
            response = requests.post(
                f"{self.base_url}/chat/completions",
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"AI chat request failed: {e}")
            raise AiServiceError(f"Error calling AI service: {e}") from e

        choices = data.get("choices") or []
        content = None
        if choices:
            content = (choices[0].get("message") or {}).get("content")
        return content or FALLBACK_ANSWER
