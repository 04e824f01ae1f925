# pourover/db/store.py
# Recipe storage: Mongo (motor) for deployments, in-memory for local dev/tests
# Both hand out Recipe snapshots with a serial integer id; Mongo _id stays inside.

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from pourover.db.indexes import COUNTERS, RECIPES
from pourover.db.presets import preset_recipes
from pourover.models.schemas import Recipe, RecipeIn

log = logging.getLogger(__name__)

class RecipeStore(ABC):

    @abstractmethod
    async def list_recipes(self) -> List[Recipe]: ...

    @abstractmethod
    async def get_recipe(self, recipe_id: int) -> Optional[Recipe]: ...

    @abstractmethod
    async def create_recipe(self, data: RecipeIn) -> Recipe: ...

    @abstractmethod
    async def update_recipe(self, recipe_id: int, data: RecipeIn) -> Optional[Recipe]: ...

    @abstractmethod
    async def delete_recipe(self, recipe_id: int) -> bool: ...

    @abstractmethod
    async def count(self) -> int: ...

    async def ping(self) -> None:
        return None

class MemoryRecipeStore(RecipeStore):
    """Dict-backed store. Ids keep counting up after deletes."""

    def __init__(self, seed: bool = False):
        self._recipes: Dict[int, Recipe] = {}
        self._current_id = 1
        if seed:
            for preset in preset_recipes():
                self._insert(preset)

    def _insert(self, data: RecipeIn) -> Recipe:
        recipe = Recipe(id=self._current_id, **data.model_dump())
        self._current_id += 1
        self._recipes[recipe.id] = recipe
        return recipe

    async def list_recipes(self) -> List[Recipe]:
        return [self._recipes[k] for k in sorted(self._recipes)]

    async def get_recipe(self, recipe_id: int) -> Optional[Recipe]:
        return self._recipes.get(recipe_id)

    async def create_recipe(self, data: RecipeIn) -> Recipe:
        return self._insert(data)

    async def update_recipe(self, recipe_id: int, data: RecipeIn) -> Optional[Recipe]:
        if recipe_id not in self._recipes:
            return None
        recipe = Recipe(id=recipe_id, **data.model_dump())
        self._recipes[recipe_id] = recipe
        return recipe

    async def delete_recipe(self, recipe_id: int) -> bool:
        return self._recipes.pop(recipe_id, None) is not None

    async def count(self) -> int:
        return len(self._recipes)

class MongoRecipeStore(RecipeStore):

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.coll = db[RECIPES]
        self.counters = db[COUNTERS]

    async def _next_id(self) -> int:
        # atomic serial: {"_id": "recipes", "seq": N}
        doc = await self.counters.find_one_and_update(
            {"_id": RECIPES},
            {"$inc": {"seq": 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return int(doc["seq"])

    async def list_recipes(self) -> List[Recipe]:
        docs = await self.coll.find({}, {"_id": 0}).sort("id", 1).to_list(length=None)
        return [Recipe.model_validate(d) for d in docs]

    async def get_recipe(self, recipe_id: int) -> Optional[Recipe]:
        doc = await self.coll.find_one({"id": recipe_id}, {"_id": 0})
        return Recipe.model_validate(doc) if doc else None

    async def create_recipe(self, data: RecipeIn) -> Recipe:
        recipe = Recipe(id=await self._next_id(), **data.model_dump())
        await self.coll.insert_one(recipe.model_dump())
        log.info("recipe created id=%s name=%r", recipe.id, recipe.name)
        return recipe

    async def update_recipe(self, recipe_id: int, data: RecipeIn) -> Optional[Recipe]:
        doc = await self.coll.find_one_and_update(
            {"id": recipe_id},
            {"$set": data.model_dump()},
            projection={"_id": 0},
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            return None
        log.info("recipe updated id=%s", recipe_id)
        return Recipe.model_validate(doc)

    async def delete_recipe(self, recipe_id: int) -> bool:
        result = await self.coll.delete_one({"id": recipe_id})
        if result.deleted_count:
            log.info("recipe deleted id=%s", recipe_id)
        return result.deleted_count > 0

    async def count(self) -> int:
        return await self.coll.count_documents({})

    async def ping(self) -> None:
        await self.db.command("ping")

async def seed_presets(store: RecipeStore) -> int:
    # only into an empty store, so user edits to presets survive restarts
    if await store.count() > 0:
        return 0
    created = 0
    for preset in preset_recipes():
        await store.create_recipe(preset)
        created += 1
    log.info("seeded %d preset recipes", created)
    return created
