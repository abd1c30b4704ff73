import asyncio
import json

import pytest

from services.analysis_service import (
    AnalysisError, FALLBACK_DAILY_INSIGHT, analyze_entry, analyze_transcript, daily_insight, recommend_content,
)
from conftest import FakeLLMRouter


def test_recommendations_by_issue_capped_at_three():
    recs = recommend_content(["Insomnia", "stress"], "calm")
    assert len(recs) == 3
    assert recs[0]["title"].endswith("Relaxing Sleep Music Playlist")


def test_recommendation_fallbacks_by_emotion():
    assert recommend_content([], "anxious")[0]["title"].endswith("Anxiety Relief Playlist")
    assert recommend_content(None, "sad")[0]["title"].endswith("Uplifting Music Playlist")
    assert recommend_content(["boredom"], "happy") == []


def test_analyze_entry_parses_json_and_adds_recommendations():
    payload = {
        "insight": "You showed up today ✨",
        "emotionClassification": "anxious",
        "anxietyLevel": 7,
        "detectedIssues": ["loneliness"],
        "suggestions": ["Call a friend"],
    }
    llm = FakeLLMRouter(["Sure! " + json.dumps(payload)])
    analysis = asyncio.run(analyze_entry(llm, "Sad", 6, "Nobody texted me back."))

    assert analysis["anxietyLevel"] == 7
    assert len(analysis["contentRecommendations"]) == 2
    call = llm.calls[0]
    assert call["json_mode"] is True
    assert "Nobody texted me back." in call["messages"][1]["content"]
    assert "intensity scale (1-10): 6" in call["messages"][1]["content"]


def test_analyze_transcript_uses_voice_prompt():
    llm = FakeLLMRouter([json.dumps({"inferredMood": "Calm", "inferredScale": 2})])
    analysis = asyncio.run(analyze_transcript(llm, "just chilling"))
    assert analysis["inferredMood"] == "Calm"
    assert analysis["contentRecommendations"] == []
    assert "voice transcript" in llm.calls[0]["messages"][0]["content"]


@pytest.mark.parametrize("text", ["", "not json at all", "{broken", "[1, 2]"])
def test_unusable_model_output_raises(text):
    with pytest.raises(AnalysisError):
        asyncio.run(analyze_entry(FakeLLMRouter([text]), "Happy", 5, "hi"))


def test_router_failure_raises():
    with pytest.raises(AnalysisError):
        asyncio.run(analyze_transcript(FakeLLMRouter(status="error"), "hello"))


def test_daily_insight():
    assert asyncio.run(daily_insight(FakeLLMRouter(["  Drink water 💧 "]))) == "Drink water 💧"
    assert asyncio.run(daily_insight(FakeLLMRouter(status="error"))) == FALLBACK_DAILY_INSIGHT


@pytest.mark.parametrize("issues", [3, "stress", {"stress": True}])
def test_non_list_issues_are_ignored(issues):
    assert recommend_content(issues, "calm") == []
    assert recommend_content(issues, "anxious")[0]["title"].endswith("Anxiety Relief Playlist")
