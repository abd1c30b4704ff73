"""
tts_service.py — Text-to-speech pass-through
Splits text into sentence-aligned chunks and fetches MP3 audio for each from
Google Translate's TTS endpoint, returning the concatenated bytes.
"""

import logging
import re

import httpx

from config import TTS_CHUNK_SIZE, TTS_DEFAULT_LANG

logger = logging.getLogger(__name__)

TTS_ENDPOINT = "https://translate.google.com/translate_tts"
USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

_SENTENCE_RE = re.compile(r"[^.!?]+(?:[.!?]+|$)")


class TTSError(Exception):
    """Upstream speech synthesis failed."""


def split_text_into_chunks(text: str, max_length: int = TTS_CHUNK_SIZE) -> list[str]:
    """
    Pack whole sentences into chunks of at most max_length characters.
    A single sentence longer than max_length becomes its own chunk.
    Trailing text without closing punctuation is kept as a last sentence.
    """
    sentences = _SENTENCE_RE.findall(text) or [text]
    chunks = []
    current = ""
    for sentence in sentences:
        if len(current) + len(sentence) <= max_length:
            current += sentence
        else:
            if current.strip():
                chunks.append(current.strip())
            current = sentence
    if current.strip():
        chunks.append(current.strip())
    return chunks


def normalize_language(lang: str | None) -> str:
    """Map browser locale tags onto the codes the TTS endpoint expects."""
    if not lang:
        return TTS_DEFAULT_LANG
    if lang.lower() == "en-gb":
        return "en-uk"
    return lang


class TTSService:
    def __init__(self, endpoint: str = TTS_ENDPOINT, timeout: float = 15.0, transport=None):
        self.endpoint = endpoint
        self.timeout = timeout
        self.transport = transport

    async def synthesize(self, text: str, lang: str | None = None) -> bytes:
        tts_lang = normalize_language(lang)
        audio = bytearray()
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            for chunk in split_text_into_chunks(text):
                params = {"ie": "UTF-8", "tl": tts_lang, "client": "tw-ob", "q": chunk}
                try:
                    response = await client.get(self.endpoint, params=params, headers={"User-Agent": USER_AGENT})
                    response.raise_for_status()
                except httpx.HTTPStatusError as e:
                    raise TTSError(f"TTS request failed: {e.response.status_code} {e.response.reason_phrase}") from e
                except httpx.HTTPError as e:
                    raise TTSError(f"TTS request failed: {e}") from e
                audio.extend(response.content)
        logger.debug(f"Synthesized {len(audio)} bytes of audio")
        return bytes(audio)


_tts_instance = None


def get_tts_service() -> TTSService:
    """FastAPI dependency — shared TTSService instance."""
    global _tts_instance
    if _tts_instance is None:
        _tts_instance = TTSService()
    return _tts_instance
