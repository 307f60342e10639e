from __future__ import annotations

from typing import Iterable

FALLBACK_VOCABULARY: tuple[str, ...] = (
    "cat", "dog", "bird", "fish", "tree",
    "sun", "moon", "star", "cloud", "rain",
    "red", "blue", "green", "yellow", "orange",
    "one", "two", "three", "four", "five",
)

DEFAULT_GLYPH = "📝"

GLYPHS: dict[str, str] = {
    "cat": "🐱", "dog": "🐕", "bird": "🐦", "fish": "🐟", "tree": "🌳",
    "sun": "☀️", "moon": "🌙", "star": "⭐", "cloud": "☁️", "rain": "🌧️",
    "red": "🔴", "blue": "🔵", "green": "🟢", "yellow": "🟡", "orange": "🟠",
    "one": "1️⃣", "two": "2️⃣", "three": "3️⃣", "four": "4️⃣", "five": "5️⃣",
    "happy": "😊", "sad": "😢", "big": "🐘", "small": "🐜", "fast": "🏃",
    "apple": "🍎", "banana": "🍌", "car": "🚗", "house": "🏠", "book": "📚",
    "ball": "⚽", "flower": "🌸", "heart": "❤️", "water": "💧", "fire": "🔥",
}

CORRECT_MESSAGES: tuple[str, ...] = (
    "Awesome!",
    "Great job!",
    "Super!",
    "Amazing!",
    "Fantastic!",
    "Perfect!",
    "Wonderful!",
)

MISS_MESSAGES: tuple[str, ...] = (
    "Nice try!",
    "Keep going!",
    "You got this!",
    "Almost! Try again!",
)


def glyph_for(word: str) -> str:
    return GLYPHS.get(word.lower(), DEFAULT_GLYPH)


def normalize_vocabulary(words: Iterable[str]) -> list[str]:
    """Strip blanks and repeats, keeping first-seen order."""
    seen: dict[str, None] = {}
    for raw in words:
        word = str(raw).strip()
        if word and word not in seen:
            seen[word] = None
    return list(seen)
