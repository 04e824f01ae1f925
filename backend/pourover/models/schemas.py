# pourover/models/schemas.py
# Recipe / weight curve schemas
# Wire format is camelCase (totalTime, targetPoints), same as the web client.
from __future__ import annotations
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_BREW_SECONDS = 24 * 60 * 60
MAX_WEIGHT_GRAMS = 100_000.0

class WeightPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    time: float = Field(..., ge=0, le=MAX_BREW_SECONDS, allow_inf_nan=False)     # seconds
    weight: float = Field(..., ge=0, le=MAX_WEIGHT_GRAMS, allow_inf_nan=False)   # grams

# # Create payload
class RecipeIn(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    totalTime: int = Field(..., gt=0, le=MAX_BREW_SECONDS)
    targetPoints: List[WeightPoint] = Field(..., min_length=1)

    @field_validator("name")
    @classmethod
    def _v_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v

    @field_validator("targetPoints")
    @classmethod
    def _v_sort_points(cls, v: List[WeightPoint]) -> List[WeightPoint]:
        # interpolation expects ascending time; stable sort keeps ties in input order
        return sorted(v, key=lambda p: p.time)

# # Update payload: the editor needs at least two points to draw a curve
class RecipeUpdateIn(RecipeIn):
    targetPoints: List[WeightPoint] = Field(..., min_length=2)

class Recipe(RecipeIn):
    model_config = ConfigDict(frozen=True)

    id: int

# # Live brew status (timer readout)
class BrewStatusOut(BaseModel):
    recipeId: int
    time: float
    clock: str
    progress: float
    targetWeight: float
    scale: float = 1.0
    finished: bool = False

# # Chart data for the target curve vs. current position
class ChartOut(BaseModel):
    recipeId: int
    xDomain: List[float]
    yDomain: List[float]
    points: List[WeightPoint] = Field(default_factory=list)
    samples: List[WeightPoint] = Field(default_factory=list)
    marker: Optional[WeightPoint] = None   # only while the timer is past 0
