"""
Prompt templates for the delegated responder.
"""
from typing import Optional
from mindfulchat.core.utils import mean
from mindfulchat.services.responder.types import UserContext

SYSTEM_PROMPT = """You are MindfulChat, an empathetic AI companion focused on mental health support. Your responses should be:

1. Warm, compassionate, and non-judgmental
2. Supportive without being overly clinical
3. Focused on validation and gentle guidance
4. Encouraging self-care and professional help when needed

Guidelines:
- Always validate the user's feelings
- Use gentle, caring language with occasional emojis (💙, 🌱, ✨)
- Offer practical coping strategies
- Suggest breathing exercises, journaling, or mindfulness when appropriate
- If you detect crisis language, gently encourage professional help
- Keep responses conversational but supportive
- Ask follow-up questions to show engagement

Respond with empathy and care while providing gentle guidance."""


def build_context_block(context: Optional[UserContext]) -> Optional[str]:
    """
    Summarize recent activity for the system prompt.

    Returns None when there is nothing to summarize.
    """
    if context is None or context.is_empty():
        return None

    lines = ["What you know about this user from recent activity:"]
    if context.recent_moods:
        mood = mean(sample.mood_score for sample in context.recent_moods)
        energy = mean(sample.energy for sample in context.recent_moods)
        anxiety = mean(sample.anxiety for sample in context.recent_moods)
        lines.append(
            f"- Average over the last {len(context.recent_moods)} mood check-ins: "
            f"mood {mood:.1f}/10, energy {energy:.1f}/10, anxiety {anxiety:.1f}/10"
        )
    if context.recent_exercises:
        lines.append(f"- Recently completed exercises: {', '.join(context.recent_exercises)}")
    if context.themes:
        lines.append(f"- Recurring conversation themes: {', '.join(context.themes)}")
    lines.append("Use this context to personalize your support. Do not recite it back to the user.")
    return "\n".join(lines)


def build_system_prompt(context: Optional[UserContext] = None) -> str:
    block = build_context_block(context)
    if block:
        return f"{SYSTEM_PROMPT}\n\n{block}"
    return SYSTEM_PROMPT


def build_analysis_prompt(user_message: str, draft_reply: str) -> str:
    """Second call: classify the message and finalize the reply as JSON."""
    return f"""Analyze this user message for mental health indicators and return JSON with this exact structure:

{{
  "message": "Your empathetic response here",
  "sentiment": "positive|neutral|negative",
  "stressIndicators": ["array", "of", "detected", "stress", "keywords"],
  "suggestedExercises": ["breathing", "journaling", "mindfulness", "movement"],
  "requiresImmediate": false
}}

Set "requiresImmediate" to true only if the message suggests the user may be at risk of harming themselves.
Only use these exercise categories: breathing, journaling, mindfulness, movement.

User message: "{user_message}"

Draft response: "{draft_reply}"

Use the draft response as the "message" unless it needs to be warmer or safer. Provide a warm, empathetic response that validates their feelings and offers gentle guidance."""


def build_sentiment_prompt(message: str) -> str:
    return f"""Analyze the sentiment and stress indicators in this message. Return JSON:

{{
  "sentiment": "positive|neutral|negative",
  "confidence": 0.0-1.0,
  "stressIndicators": ["array", "of", "stress", "related", "keywords", "found"]
}}

Look for indicators like: anxiety, stress, overwhelmed, panic, depressed, tired, can't sleep, worried, scared, hopeless, angry, frustrated, etc.

Message: "{message}"."""
