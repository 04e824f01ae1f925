# pourover/api/routes_recipes.py
# Recipe CRUD: list / detail / create / update / delete

from __future__ import annotations
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from pourover.core.deps import get_store
from pourover.db.store import RecipeStore
from pourover.models.schemas import Recipe, RecipeIn, RecipeUpdateIn

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/recipes", tags=["recipes"])

NOT_FOUND = "Recipe not found"

async def load_recipe(recipe_id: int, store: RecipeStore = Depends(get_store)) -> Recipe:
    """Path dependency: the recipe or 404."""
    try:
        recipe = await store.get_recipe(recipe_id)
    except Exception as e:
        log.exception("get_recipe(%s) failed", recipe_id)
        raise HTTPException(status_code=503, detail=f"DB error: {e}")
    if recipe is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return recipe

@router.get("", response_model=List[Recipe])
async def list_recipes(store: RecipeStore = Depends(get_store)):
    try:
        return await store.list_recipes()
    except Exception as e:
        log.exception("list_recipes failed")
        raise HTTPException(status_code=503, detail=f"DB error: {e}")

@router.get("/{recipe_id}", response_model=Recipe)
async def get_recipe(recipe: Recipe = Depends(load_recipe)):
    return recipe

@router.post("", response_model=Recipe, status_code=status.HTTP_201_CREATED)
async def create_recipe(payload: RecipeIn, store: RecipeStore = Depends(get_store)):
    try:
        return await store.create_recipe(payload)
    except Exception as e:
        log.exception("create_recipe failed")
        raise HTTPException(status_code=503, detail=f"DB error: {e}")

@router.patch("/{recipe_id}", response_model=Recipe)
async def update_recipe(recipe_id: int, payload: RecipeUpdateIn, store: RecipeStore = Depends(get_store)):
    # full replacement of the editable fields; points arrive already sorted
    try:
        recipe = await store.update_recipe(recipe_id, payload)
    except Exception as e:
        log.exception("update_recipe(%s) failed", recipe_id)
        raise HTTPException(status_code=503, detail=f"DB error: {e}")
    if recipe is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return recipe

@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_recipe(recipe_id: int, store: RecipeStore = Depends(get_store)):
    try:
        deleted = await store.delete_recipe(recipe_id)
    except Exception:
        log.exception("delete_recipe(%s) failed", recipe_id)
        raise HTTPException(status_code=503, detail="Failed to delete recipe")
    if not deleted:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
