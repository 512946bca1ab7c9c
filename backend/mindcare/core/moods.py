"""
Built-in mood catalogue: display metadata denormalised onto every mood event.
"""
from typing import Dict, NamedTuple, Optional


class MoodDisplay(NamedTuple):
    name: str
    color: Optional[str]
    icon: Optional[str]


MOOD_CATALOG: Dict[str, MoodDisplay] = {
    "happy": MoodDisplay("Happy", "#FFD93D", "😄"),
    "calm": MoodDisplay("Calm", "#6BCB77", "😌"),
    "excited": MoodDisplay("Excited", "#FF9F45", "🤩"),
    "tired": MoodDisplay("Tired", "#A0A0C0", "😴"),
    "sad": MoodDisplay("Sad", "#4D96FF", "😢"),
    "anxious": MoodDisplay("Anxious", "#B983FF", "😰"),
    "angry": MoodDisplay("Angry", "#FF6B6B", "😠"),
}


def resolve_mood_display(
    mood_key: str,
    mood_name: Optional[str] = None,
    mood_color: Optional[str] = None,
    mood_icon: Optional[str] = None,
) -> MoodDisplay:
    """Fill missing display fields from the catalogue; unknown keys use the key as name."""
    known = MOOD_CATALOG.get(mood_key)
    if known is None:
        return MoodDisplay(mood_name or mood_key, mood_color, mood_icon)
    return MoodDisplay(
        mood_name or known.name,
        mood_color or known.color,
        mood_icon or known.icon,
    )
