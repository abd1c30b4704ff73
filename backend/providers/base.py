from abc import ABC, abstractmethod


class BaseProvider(ABC):
    """Abstract base class for chat-completion providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """The name of this provider (e.g. 'groq')."""
        ...

    @abstractmethod
    async def chat(
        self,
        messages: list[dict],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 1024,
        json_mode: bool = False,
    ) -> dict:
        """
        Send a chat completion request.

        Args:
            messages: List of message dicts with 'role' and 'content' keys.
            model: Optional model identifier. Provider uses its default if None.
            temperature: Sampling temperature.
            max_tokens: Upper bound on generated tokens.
            json_mode: Ask the model to answer with a single JSON object.

        Returns:
            dict with keys:
                - text: str | None  — the generated text
                - provider: str     — provider name
                - model: str        — model used
                - status: "success" | "failed"
                - error: str | None — error message on failure
        """
        ...
