# pourover/db/indexes.py
# Collection indexes: awaited once from app startup (ensure_indexes()).

from __future__ import annotations
from typing import Any, Dict, List, Tuple

from motor.motor_asyncio import AsyncIOMotorDatabase

RECIPES = "recipes"
COUNTERS = "counters"

async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    """
    Make sure the recipes collection indexes exist with the expected options.
    - already there with the same options: skip
    - different unique flag: drop and recreate
    """
    coll = db[RECIPES]
    existing: Dict[str, Dict[str, Any]] = await coll.index_information()

    async def ensure(name: str, keys: List[Tuple[str, int]], **options: Any) -> None:
        if name in existing:
            need_unique = bool(options.get("unique", False))
            if bool(existing[name].get("unique", False)) == need_unique:
                return
            await coll.drop_index(name)
        await coll.create_index(keys, name=name, **options)

    # serial id shared with the API, must never collide
    await ensure("id_1", [("id", 1)], unique=True)
    await ensure("name_1", [("name", 1)])
