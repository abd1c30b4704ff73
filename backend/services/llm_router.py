"""
llm_router.py — Groq key rotation
Routes chat requests through the configured Groq API keys. A rate-limited
key is marked exhausted for the rest of the day and the next one is tried.
"""

import logging
from datetime import date

from config import GROQ_API_KEYS
from providers.groq_provider import GroqProvider

logger = logging.getLogger(__name__)


class LLMRouter:
    """Round-robin over API keys for one provider class."""

    def __init__(self, api_keys: list[str] | None = None, provider_class=GroqProvider):
        self.api_keys = list(api_keys if api_keys is not None else GROQ_API_KEYS)
        self.provider_class = provider_class
        self._current_index = 0
        self._exhausted: set[str] = set()
        self._last_reset: date = date.today()

    # ------------------------------------------------------------------
    def _reset_if_new_day(self):
        if date.today() != self._last_reset:
            self._exhausted.clear()
            self._last_reset = date.today()

    def _next_keys(self) -> list[str]:
        """Active keys starting at the current rotation index."""
        n = len(self.api_keys)
        ordered = [self.api_keys[(self._current_index + i) % n] for i in range(n)] if n else []
        if n:
            self._current_index = (self._current_index + 1) % n
        return [k for k in ordered if k not in self._exhausted]

    # ------------------------------------------------------------------
    async def route(
        self,
        messages: list,
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 1024,
        json_mode: bool = False,
    ) -> dict:
        """Send a chat request, rotating keys on rate limits.

        Returns
        -------
        dict  with keys: text, provider, model, status, error
        """
        self._reset_if_new_day()

        last_error = "No Groq API key configured"
        for api_key in self._next_keys():
            provider = self.provider_class(api_key=api_key)
            result = await provider.chat(
                messages, model, temperature=temperature, max_tokens=max_tokens, json_mode=json_mode,
            )

            if result.get("status") == "success":
                return {
                    "text": result.get("text") or "",
                    "provider": result.get("provider", provider.name),
                    "model": result.get("model", model),
                    "status": "success",
                    "error": None,
                }

            error_msg = str(result.get("error") or "")
            if "429" in error_msg or "rate" in error_msg.lower():
                logger.warning(f"{provider.name} key rate-limited, rotating")
                self._exhausted.add(api_key)
                last_error = error_msg
                continue

            last_error = error_msg or f"{provider.name} returned an error"
            logger.error(f"LLM request failed: {last_error}")
            break

        return {
            "text": None,
            "provider": None,
            "model": None,
            "status": "error",
            "error": last_error,
        }


_router_instance = None


def get_llm_router() -> LLMRouter:
    """FastAPI dependency — one router per process so key state is shared."""
    global _router_instance
    if _router_instance is None:
        _router_instance = LLMRouter()
    return _router_instance
