"""
Default exercise catalog.
"""
import logging
from typing import List
from sqlalchemy.orm import Session
from mindfulchat.models.exercise import Exercise, ExerciseCategory
from mindfulchat.services import storage

logger = logging.getLogger(__name__)

DEFAULT_EXERCISES = (
    {
        "title": "4-7-8 Breathing",
        "description": "A calming breathing technique to reduce anxiety",
        "category": ExerciseCategory.BREATHING,
        "duration": 3,
        "instructions": (
            "1. Exhale completely through your mouth\n"
            "2. Close your mouth and inhale through your nose for 4 counts\n"
            "3. Hold your breath for 7 counts\n"
            "4. Exhale through your mouth for 8 counts\n"
            "5. Repeat 3-4 times"
        ),
        "icon": "fas fa-wind",
    },
    {
        "title": "Gratitude Journal",
        "description": "Write down three things you're grateful for",
        "category": ExerciseCategory.JOURNALING,
        "duration": 5,
        "instructions": (
            "1. Find a quiet space\n"
            "2. Think about your day\n"
            "3. Write down 3 specific things you're grateful for\n"
            "4. Include why each thing matters to you\n"
            "5. Notice how you feel after writing"
        ),
        "icon": "fas fa-pen",
    },
    {
        "title": "Body Scan Meditation",
        "description": "Mindful awareness of your body from head to toe",
        "category": ExerciseCategory.MINDFULNESS,
        "duration": 10,
        "instructions": (
            "1. Lie down comfortably\n"
            "2. Close your eyes and breathe naturally\n"
            "3. Start at the top of your head\n"
            "4. Slowly notice each part of your body\n"
            "5. Notice any sensations without judgment\n"
            "6. Move down to your toes"
        ),
        "icon": "fas fa-spa",
    },
    {
        "title": "Progressive Muscle Relaxation",
        "description": "Tense and release muscle groups to reduce physical stress",
        "category": ExerciseCategory.MOVEMENT,
        "duration": 15,
        "instructions": (
            "1. Start with your toes - tense for 5 seconds, then relax\n"
            "2. Move up to your calves, thighs, etc.\n"
            "3. Tense each muscle group for 5 seconds\n"
            "4. Notice the contrast between tension and relaxation\n"
            "5. End with your face and scalp"
        ),
        "icon": "fas fa-dumbbell",
    },
)


def seed_exercises(db: Session) -> List[Exercise]:
    """Insert catalog entries whose title is not stored yet. Returns the new rows."""
    existing_titles = {title for (title,) in db.query(Exercise.title).all()}
    created = []
    for exercise in DEFAULT_EXERCISES:
        if exercise["title"] in existing_titles:
            continue
        created.append(storage.create_exercise(db, **exercise))
    if created:
        logger.info(f"Seeded {len(created)} exercises")
    return created
