import httpx
from providers.base import BaseProvider
from config import GROQ_MODEL


class GroqProvider(BaseProvider):
    """Provider for Groq inference API using standard httpx."""

    def __init__(self, api_key: str, endpoint: str = "https://api.groq.com/openai/v1/chat/completions"):
        self.api_key = api_key
        self.endpoint = endpoint

    @property
    def name(self) -> str:
        return "groq"

    async def chat(
        self,
        messages: list[dict],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 1024,
        json_mode: bool = False,
    ) -> dict:
        used_model = model or GROQ_MODEL
        try:
            headers = {
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json"
            }
            body = {
                "model": used_model,
                "messages": messages,
                "temperature": temperature,
                "max_tokens": max_tokens,
            }
            if json_mode:
                body["response_format"] = {"type": "json_object"}

            async with httpx.AsyncClient(timeout=30.0) as client:
                response = await client.post(self.endpoint, headers=headers, json=body)
                response.raise_for_status()
                data = response.json()
                text = data["choices"][0]["message"]["content"] if data.get("choices") else None

            return {
                "text": text,
                "provider": self.name,
                "model": used_model,
                "status": "success",
                "error": None,
            }
        except httpx.TimeoutException:
            return {
                "text": None,
                "provider": self.name,
                "model": used_model,
                "status": "failed",
                "error": "Timeout",
            }
        except httpx.HTTPStatusError as e:
            return {
                "text": None,
                "provider": self.name,
                "model": used_model,
                "status": "failed",
                "error": f"{e.response.status_code} {e.response.reason_phrase}",
            }
        except (httpx.HTTPError, KeyError, IndexError, ValueError) as e:
            return {
                "text": None,
                "provider": self.name,
                "model": used_model,
                "status": "failed",
                "error": str(e),
            }
