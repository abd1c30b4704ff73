"""
analysis_service.py — Emotional analysis of journal entries
Sends written entries and voice transcripts to the LLM, parses the JSON
answer, and attaches curated self-care content for detected issues.
"""

import json
import logging

from config import ASSISTANT_NAME

logger = logging.getLogger(__name__)

MAX_RECOMMENDATIONS = 3

CONTENT_RECOMMENDATIONS = {
    "insomnia": [
        {"title": "🎵 Relaxing Sleep Music Playlist", "url": "https://open.spotify.com/playlist/37i9dQZF1DWZd79rJ6a7lp", "type": "playlist"},
        {"title": "🧘 Sleep Meditation (10 min)", "url": "https://www.youtube.com/watch?v=aEqlQvczMJQ", "type": "video"},
        {"title": "📖 Tips for Better Sleep", "url": "https://www.sleepfoundation.org/sleep-hygiene", "type": "article"},
    ],
    "stress": [
        {"title": "🎵 Calm & Relaxing Music", "url": "https://open.spotify.com/playlist/37i9dQZF1DWXe9gFZP0gtP", "type": "playlist"},
        {"title": "🧘 5-Minute Stress Relief", "url": "https://www.youtube.com/watch?v=inpok4MKVLM", "type": "video"},
        {"title": "💨 Guided Breathing Exercise", "url": "https://www.youtube.com/watch?v=tEmt1Znux58", "type": "video"},
    ],
    "anxiety": [
        {"title": "🎵 Anxiety Relief Playlist", "url": "https://open.spotify.com/playlist/37i9dQZF1DX3Ogo9pFvBkY", "type": "playlist"},
        {"title": "🧘 Grounding Techniques", "url": "https://www.youtube.com/watch?v=30VMIEmA114", "type": "video"},
        {"title": "📖 Understanding Anxiety", "url": "https://www.mind.org.uk/information-support/types-of-mental-health-problems/anxiety-and-panic-attacks/", "type": "article"},
    ],
    "sadness": [
        {"title": "🎵 Uplifting Music Playlist", "url": "https://open.spotify.com/playlist/37i9dQZF1DX3rxVfibe1L0", "type": "playlist"},
        {"title": "💪 Mood Boosting Activities", "url": "https://www.youtube.com/watch?v=F28MGLlpP90", "type": "video"},
    ],
    "loneliness": [
        {"title": "🎵 Feel-Good Music", "url": "https://open.spotify.com/playlist/37i9dQZF1DX9XIFQuFvzM4", "type": "playlist"},
        {"title": "🤗 Self-Compassion Meditation", "url": "https://www.youtube.com/watch?v=QT9OMhuGjrc", "type": "video"},
    ],
}

_STYLE = """Response Style:
- Rich with emojis: use a wide variety (✨ 🌊 🍃 🪐 🧡 🎧 🕯️) to keep it visually engaging.
- Adaptive: if the input is short, be curious and encouraging. If long, be deep and reflective.
- Language: Indonesian, casual and warm but smart.

Important guidelines:
- You are NOT a therapist or doctor. Never diagnose.
- If the user expresses severe distress, self-harm, or suicidal thoughts, gently encourage them to speak with a professional."""

ENTRY_SYSTEM_PROMPT = f"""You are {ASSISTANT_NAME}, a compassionate digital companion.
Analyze the user's journal entry.

Your tasks:
1. INFER the user's primary emotion (mood).
2. ESTIMATE the intensity/stress level (1-10) based on the content.
3. Provide a warm, supportive insight. Be creative and avoid repetitive phrases.
4. Detect specific issues (insomnia, stress, anxiety, sadness, loneliness).
5. Provide actionable suggestions.

{_STYLE}

You MUST respond in valid JSON format with this exact structure:
{{
  "insight": "Your reflection here...",
  "insightVoice": "Spoken version of the insight...",
  "emotionClassification": "One of: happy, calm, sad, anxious, angry, confused, hopeful, neutral",
  "anxietyLevel": 1-10,
  "anxietyIndicators": ["detected", "anxiety", "markers"],
  "detectedIssues": ["issue1", "issue2"],
  "suggestions": ["suggestion1", "suggestion2"],
  "followUp": "Follow up question?"
}}"""

VOICE_SYSTEM_PROMPT = f"""You are {ASSISTANT_NAME}, a compassionate digital companion.
Analyze the user's spoken voice transcript.

Your tasks:
1. INFER the user's primary emotion (mood). Even if the input is very short (e.g. "I'm tired"), infer the underlying feeling.
2. ESTIMATE the intensity/stress level (1-10).
3. Provide a warm, supportive insight. Be creative and avoid repetitive phrases.
4. Detect specific issues (insomnia, stress, anxiety, sadness, loneliness).
5. Provide actionable suggestions.

{_STYLE}

You MUST respond in valid JSON:
{{
  "insight": "Your reflection here...",
  "insightVoice": "Spoken version of the insight...",
  "inferredMood": "One of: Happy, Calm, Sad, Anxious, Angry, Confused, Hopeful, Neutral",
  "inferredScale": 1-10,
  "emotionClassification": "simple emotion key (e.g. anxious)",
  "detectedIssues": ["issue1", "issue2"],
  "suggestions": ["suggestion1", "suggestion2"],
  "followUp": "Follow up question?"
}}"""

DAILY_INSIGHT_PROMPT = f"""You are {ASSISTANT_NAME}. Generate a SHORT, uplifting daily insight or tip for the user.
- Language: English.
- Style: warm, creative, diverse.
- Format: plain text, max 1 sentence.
- Emojis: include 1-2 relevant emojis."""

DEFAULT_DAILY_INSIGHT = "Take a deep breath. You are doing great! 🌿"
FALLBACK_DAILY_INSIGHT = "Small steps lead to big changes. Keep going! ✨"

FALLBACK_ANALYSIS = {
    "insight": "I'm having trouble processing your thoughts right now. Please try again in a moment. 🙏",
    "insightVoice": "I'm having trouble processing your thoughts right now. Please try again in a moment.",
    "emotionClassification": "neutral",
    "anxietyLevel": 0,
    "anxietyIndicators": [],
    "detectedIssues": [],
    "suggestions": ["Take a deep breath", "Try again in a moment"],
    "followUp": "Would you like to try sharing again?",
    "contentRecommendations": [],
    "error": "Analysis temporarily unavailable",
}


class AnalysisError(Exception):
    """The model gave no usable analysis."""


def _parse_json_object(text: str | None) -> dict:
    if not text:
        raise AnalysisError("Empty response from model")
    # Excerpt the outermost object in case the model wrapped it in prose
    start = text.find("{")
    end = text.rfind("}") + 1
    if start == -1 or end == 0:
        raise AnalysisError("Model response is not JSON")
    try:
        parsed = json.loads(text[start:end])
    except json.JSONDecodeError as e:
        raise AnalysisError(f"Model response is not valid JSON: {e}") from e
    if not isinstance(parsed, dict):
        raise AnalysisError("Model response is not a JSON object")
    return parsed


def recommend_content(detected_issues: list | None, emotion: str | None) -> list[dict]:
    """Curated resources for the detected issues, at most three."""
    recommendations = []
    if not isinstance(detected_issues, list):
        detected_issues = []
    for issue in detected_issues:
        recommendations.extend(CONTENT_RECOMMENDATIONS.get(str(issue).lower(), []))

    if not recommendations and emotion == "anxious":
        recommendations.extend(CONTENT_RECOMMENDATIONS["anxiety"])
    if not recommendations and emotion == "sad":
        recommendations.extend(CONTENT_RECOMMENDATIONS["sadness"])

    return recommendations[:MAX_RECOMMENDATIONS]


async def _analyze(llm_router, system_prompt: str, user_message: str) -> dict:
    resp = await llm_router.route(
        [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_message},
        ],
        temperature=0.7,
        max_tokens=1024,
        json_mode=True,
    )
    if resp.get("status") != "success":
        raise AnalysisError(resp.get("error") or "LLM request failed")

    analysis = _parse_json_object(resp.get("text"))
    analysis["contentRecommendations"] = recommend_content(
        analysis.get("detectedIssues"), analysis.get("emotionClassification"),
    )
    return analysis


async def analyze_entry(llm_router, mood: str, scale: int, entry: str) -> dict:
    """Analyze a written journal entry together with the user's own mood pick."""
    user_message = (
        f"User's initial mood selection: {mood}\n"
        f"User's intensity scale (1-10): {scale}\n\n"
        f'Journal entry:\n"{entry}"\n\n'
        "Please analyze this journal entry and provide your response in the specified JSON format. "
        "Remember to detect any specific issues mentioned."
    )
    return await _analyze(llm_router, ENTRY_SYSTEM_PROMPT, user_message)


async def analyze_transcript(llm_router, transcript: str) -> dict:
    """Analyze a voice transcript; the model also infers mood and scale."""
    user_message = f'Here is the user\'s spoken transcript:\n"{transcript}"'
    return await _analyze(llm_router, VOICE_SYSTEM_PROMPT, user_message)


async def daily_insight(llm_router) -> str:
    resp = await llm_router.route(
        [
            {"role": "system", "content": DAILY_INSIGHT_PROMPT},
            {"role": "user", "content": "Give me a unique daily insight for today."},
        ],
        temperature=0.9,
        max_tokens=100,
    )
    if resp.get("status") != "success":
        logger.warning(f"Daily insight unavailable: {resp.get('error')}")
        return FALLBACK_DAILY_INSIGHT
    return (resp.get("text") or "").strip() or DEFAULT_DAILY_INSIGHT
