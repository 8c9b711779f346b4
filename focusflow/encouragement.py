"""Short motivational lines shown when a focus session finishes."""

from __future__ import annotations

import random

COMPLETION_MESSAGES: list[str] = [
    "Nice work. That block of focus is done.",
    "Session complete. Take a breath before the next one.",
    "You showed up and saw it through.",
    "Done! Stretch, sip some water, then decide what's next.",
    "Progress does not have to be perfect to count.",
    "One focused block at a time adds up.",
]

START_MESSAGES: list[str] = [
    "Pick one thing and give it your attention.",
    "Starting is the hardest part.",
    "Small steps still move you forward.",
]


def get_completion_message(rng: random.Random | None = None) -> str:
    return (rng or random).choice(COMPLETION_MESSAGES)


def get_start_message(rng: random.Random | None = None) -> str:
    return (rng or random).choice(START_MESSAGES)
