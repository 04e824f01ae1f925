# pourover/api/routes_brew.py
# Brewing views over a stored recipe: scaled copy, live target, chart data
# Nothing here writes to the store.

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from pourover.api.routes_recipes import load_recipe
from pourover.models.schemas import MAX_BREW_SECONDS, BrewStatusOut, ChartOut, Recipe, WeightPoint
from pourover.services.curve import (
    InvalidInputError,
    max_weight,
    sample_curve,
    scale_points,
    target_weight,
)
from pourover.services.timer import brew_status

router = APIRouter(prefix="/api/recipes", tags=["brew"])

MAX_CHART_SAMPLES = 5000
MAX_SCALE = 100.0

def _scaled(recipe: Recipe, factor: float) -> Recipe:
    if factor == 1:
        return recipe
    return recipe.model_copy(update={"targetPoints": scale_points(recipe.targetPoints, factor)})

@router.get("/{recipe_id}/scaled", response_model=Recipe)
async def scaled_recipe(
    factor: float = Query(..., gt=0, le=MAX_SCALE, allow_inf_nan=False, description="batch size multiplier (e.g. 1.5 for 450g)"),
    recipe: Recipe = Depends(load_recipe),
):
    """Recipe snapshot with every target weight multiplied by ``factor`` (not saved)."""
    try:
        return _scaled(recipe, factor)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/{recipe_id}/target", response_model=BrewStatusOut)
async def brew_target(
    t: float = Query(0.0, ge=0, le=MAX_BREW_SECONDS, allow_inf_nan=False, description="elapsed seconds"),
    scale: float = Query(1.0, gt=0, le=MAX_SCALE, allow_inf_nan=False),
    recipe: Recipe = Depends(load_recipe),
):
    try:
        return brew_status(recipe, t, scale)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/{recipe_id}/chart", response_model=ChartOut)
async def brew_chart(
    t: float = Query(0.0, ge=0, le=MAX_BREW_SECONDS, allow_inf_nan=False, description="elapsed seconds; marker drawn when > 0"),
    scale: float = Query(1.0, gt=0, le=MAX_SCALE, allow_inf_nan=False),
    step: float = Query(1.0, gt=0, allow_inf_nan=False, description="sample spacing in seconds"),
    recipe: Recipe = Depends(load_recipe),
):
    if recipe.totalTime / step > MAX_CHART_SAMPLES:
        raise HTTPException(status_code=400, detail=f"step too small (max {MAX_CHART_SAMPLES} samples)")

    try:
        recipe = _scaled(recipe, scale)
        points = recipe.targetPoints
        samples = sample_curve(points, recipe.totalTime, step)
        marker = None
        if t > 0:
            marker = WeightPoint(time=t, weight=target_weight(points, t))
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return ChartOut(
        recipeId=recipe.id,
        xDomain=[0.0, float(recipe.totalTime)],
        yDomain=[0.0, max_weight(points)],
        points=list(points),
        samples=samples,
        marker=marker,
    )
