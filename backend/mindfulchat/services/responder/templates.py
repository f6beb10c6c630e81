"""
Static reply templates and keyword tables.

Tables are tuples so they cannot be mutated at runtime. Order matters:
the first trigger group that matches wins.
"""
from typing import NamedTuple, Tuple

EXERCISE_CATEGORIES = ("breathing", "journaling", "mindfulness", "movement")


class ResponseTemplate(NamedTuple):
    """Canned replies for one group of trigger keywords."""
    name: str
    triggers: Tuple[str, ...]
    responses: Tuple[str, ...]
    stress_indicators: Tuple[str, ...]
    suggested_exercises: Tuple[str, ...]


RESPONSE_TEMPLATES: Tuple[ResponseTemplate, ...] = (
    ResponseTemplate(
        name="anxiety",
        triggers=("anxious", "anxiety", "worried", "stress"),
        responses=(
            "I hear that you're feeling anxious, and that's completely valid. Anxiety can feel "
            "overwhelming, but you're not alone in this. 💙\n\nWould you like to try a quick breathing "
            "exercise? Sometimes focusing on our breath can help ground us in the present moment. "
            "What's been on your mind that's causing these anxious feelings?",
            "Thank you for sharing that you're feeling anxious. It takes courage to acknowledge these "
            "feelings. 🌱\n\nAnxiety often tries to convince us that we're in danger when we're actually "
            "safe. Have you noticed any specific thoughts or situations that tend to trigger your "
            "anxiety? Understanding our patterns can be really helpful.",
        ),
        stress_indicators=("anxiety", "worried", "stress"),
        suggested_exercises=("breathing", "mindfulness"),
    ),
    ResponseTemplate(
        name="sadness",
        triggers=("sad", "down", "depressed", "low"),
        responses=(
            "I'm sorry you're feeling down right now. Those heavy feelings are real and valid, and I "
            "want you to know that it's okay to not be okay sometimes. 💙\n\nEven in difficult moments, "
            "you've shown strength by reaching out and sharing. What's one small thing that brought you "
            "even a tiny bit of comfort today?",
            "Thank you for trusting me with how you're feeling. When we're down, it can feel like the "
            "world loses its color, but please know that these feelings, while painful, are temporary. "
            "🌱\n\nWould it help to talk about what's been weighing on your heart lately?",
        ),
        stress_indicators=("sadness", "low mood"),
        suggested_exercises=("journaling", "mindfulness"),
    ),
    ResponseTemplate(
        name="overwhelm",
        triggers=("overwhelmed", "too much", "can't handle", "burnout"),
        responses=(
            "It sounds like you're carrying a really heavy load right now, and feeling overwhelmed is "
            "such a natural response to that. You're doing more than you realize. 💙\n\nWhen everything "
            "feels like too much, sometimes we need to pause and breathe. What's the one thing that "
            "feels most urgent to you right now? We can break things down together.",
            "Feeling overwhelmed is your mind's way of saying 'this is a lot to handle.' You're not "
            "failing - you're human, and humans have limits. 🌱\n\nLet's take a step back together. What "
            "would it feel like to give yourself permission to tackle just one small thing at a time?",
        ),
        stress_indicators=("overwhelmed", "burnout"),
        suggested_exercises=("breathing", "movement"),
    ),
    ResponseTemplate(
        name="sleep",
        triggers=("sleep", "tired", "exhausted", "insomnia"),
        responses=(
            "Sleep struggles can be so draining, both physically and emotionally. When our rest is "
            "disrupted, everything else feels harder too. 💙\n\nHave you noticed any patterns with your "
            "sleep? Sometimes our minds are too active at bedtime, or stress from the day follows us to "
            "bed. What does your evening routine look like?",
            "I hear you're having trouble with sleep. That's incredibly frustrating and can make "
            "everything feel more difficult. 🌱\n\nGood sleep is so foundational to our wellbeing. Would "
            "you like to explore some gentle relaxation techniques that might help your mind and body "
            "prepare for rest?",
        ),
        stress_indicators=("sleep issues", "fatigue"),
        suggested_exercises=("mindfulness", "breathing"),
    ),
)

POSITIVE_KEYWORDS: Tuple[str, ...] = ("good", "great", "happy")

POSITIVE_RESPONSE = (
    "I'm so glad to hear you're feeling good! It's wonderful when we can recognize and appreciate the "
    "positive moments in our lives. 🌟\n\nWhat's contributing to these good feelings? Sometimes "
    "reflecting on the positive can help us understand what brings us joy and peace."
)
POSITIVE_SUGGESTED_EXERCISES: Tuple[str, ...] = ("journaling",)

DEFAULT_RESPONSE = (
    "Thank you for sharing with me. I'm here to listen and support you through whatever you're "
    "experiencing. 💙\n\nEvery feeling you have is valid, and you don't have to face anything alone. "
    "What would be most helpful for you right now - would you like to talk more about what's on your "
    "mind, or explore some coping strategies together?"
)
DEFAULT_SUGGESTED_EXERCISES: Tuple[str, ...] = ("breathing", "journaling")

# Used when the classifier answers but omits the reply text
DEFAULT_REPLY_MESSAGE = "I'm here to listen and support you. How can I help you today? 💙"

# Used when the language model cannot be reached or its answer cannot be read
FALLBACK_MESSAGE = (
    "I'm here to listen and support you. Sometimes I might have technical difficulties, but I care "
    "about your wellbeing. How are you feeling right now? 💙"
)

CRISIS_PHRASES: Tuple[str, ...] = ("suicide", "kill myself", "end it all", "want to die", "hurt myself")

# Keywords scanned in past user messages when summarizing recurring themes
THEME_KEYWORDS: Tuple[str, ...] = (
    "anxiety", "stress", "work", "family", "sleep", "depression", "overwhelmed", "tired", "worried",
)

GREETING_MESSAGE = (
    "Hello there! 👋 I'm here to listen and support you. How are you feeling today? Feel free to share "
    "what's on your mind - there's no judgment here. 💙"
)


class CrisisResource(NamedTuple):
    label: str
    href: str


CRISIS_RESOURCES: Tuple[CrisisResource, ...] = (
    CrisisResource(label="Call 988 - Suicide & Crisis Lifeline", href="tel:988"),
    CrisisResource(label="Text HOME to 741741", href="sms:741741"),
)
