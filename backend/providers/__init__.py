from providers.base import BaseProvider
from providers.groq_provider import GroqProvider


__all__ = [
    "BaseProvider",
    "GroqProvider",
]
