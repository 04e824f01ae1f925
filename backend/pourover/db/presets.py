# pourover/db/presets.py
# Built-in recipes seeded into an empty store
from typing import List

from pourover.models.schemas import RecipeIn

PRESETS: List[dict] = [
    {
        "name": "Classic V60",
        "description": "Traditional Hario V60 pour-over method",
        "totalTime": 180,
        "targetPoints": [
            {"time": 0, "weight": 0},
            {"time": 30, "weight": 60},    # bloom
            {"time": 45, "weight": 60},
            {"time": 105, "weight": 200},
            {"time": 180, "weight": 300},
        ],
    },
    {
        "name": "Fast Flow",
        "description": "Quick extraction for lighter roasts",
        "totalTime": 150,
        "targetPoints": [
            {"time": 0, "weight": 0},
            {"time": 20, "weight": 50},
            {"time": 30, "weight": 50},
            {"time": 90, "weight": 200},
            {"time": 150, "weight": 250},
        ],
    },
]

def preset_recipes() -> List[RecipeIn]:
    return [RecipeIn.model_validate(p) for p in PRESETS]
