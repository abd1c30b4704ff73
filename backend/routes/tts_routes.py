import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel
from typing import Optional

from config import TTS_DEFAULT_LANG
from services.tts_service import TTSError, get_tts_service

router = APIRouter(prefix="/api/v1", tags=["Speech"])
logger = logging.getLogger(__name__)


class TTSRequest(BaseModel):
    text: Optional[str] = None
    lang: str = TTS_DEFAULT_LANG


@router.post("/tts")
async def text_to_speech(body: TTSRequest, tts=Depends(get_tts_service)):
    """Read insight text aloud; returns MP3 audio."""
    if not body.text or not body.text.strip():
        raise HTTPException(status_code=400, detail="Text is required")

    try:
        audio = await tts.synthesize(body.text, body.lang)
    except TTSError as e:
        logger.error(f"TTS error: {e}")
        raise HTTPException(status_code=500, detail="Text-to-speech failed")

    return Response(content=audio, media_type="audio/mpeg")
