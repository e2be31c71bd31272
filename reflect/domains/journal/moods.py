"""Static mood catalog.

Each mood carries the numeric score stored with an entry, the image-search
query used for entry artwork, and the writing prompt shown above the editor.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, List, Optional

DEFAULT_PROMPT = "Write your thoughts..."


@dataclass(frozen=True)
class MoodOption:
    id: str
    label: str
    emoji: str
    score: int
    image_query: str
    prompt: str

    def to_dict(self) -> dict:
        return asdict(self)


_CATALOG = (
    MoodOption("happy", "Happy", "😊", 8, "happy sunshine", "What's making you smile today?"),
    MoodOption("grateful", "Grateful", "🙏", 9, "gratitude thankful", "What are you thankful for today?"),
    MoodOption("excited", "Excited", "🤩", 9, "celebration excitement", "What are you looking forward to?"),
    MoodOption("calm", "Calm", "😌", 7, "calm lake", "What brought you peace today?"),
    MoodOption("content", "Content", "🙂", 7, "cozy afternoon", "What felt just right today?"),
    MoodOption("hopeful", "Hopeful", "🌱", 8, "sunrise hope", "What are you hoping for?"),
    MoodOption("neutral", "Neutral", "😐", 5, "minimal landscape", "How was your day, honestly?"),
    MoodOption("tired", "Tired", "😴", 4, "rest sleep", "What drained your energy today?"),
    MoodOption("anxious", "Anxious", "😰", 3, "stormy sky", "What's weighing on your mind?"),
    MoodOption("frustrated", "Frustrated", "😤", 3, "tangled rope", "What got in your way today?"),
    MoodOption("sad", "Sad", "😢", 2, "rain window", "What's making you feel down?"),
    MoodOption("angry", "Angry", "😠", 2, "fire storm", "What triggered your anger?"),
)

MOODS: Dict[str, MoodOption] = {mood.id: mood for mood in _CATALOG}


def get_mood(mood_id: Optional[str]) -> Optional[MoodOption]:
    if not mood_id:
        return None
    return MOODS.get(mood_id)


def is_valid_mood(mood_id: Optional[str]) -> bool:
    return get_mood(mood_id) is not None


def list_moods() -> List[MoodOption]:
    return list(_CATALOG)


def content_prompt(mood_id: Optional[str]) -> str:
    """Label shown above the editor for the selected mood."""
    mood = get_mood(mood_id)
    return mood.prompt if mood else DEFAULT_PROMPT
