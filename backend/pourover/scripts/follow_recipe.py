# pourover/scripts/follow_recipe.py
# Console brew follower: prints clock / target weight / progress every tick
# usage: python -m pourover.scripts.follow_recipe --id 1 --scale 1.5
#        python -m pourover.scripts.follow_recipe --preset "Classic V60"
import argparse
import asyncio
from typing import Optional

from pourover.db.init import close_db, init_db
from pourover.db.presets import preset_recipes
from pourover.db.store import MongoRecipeStore
from pourover.models.schemas import Recipe
from pourover.services.timer import BrewTimer, brew_status

async def _load(recipe_id: Optional[int], preset: Optional[str]) -> Optional[Recipe]:
    if preset:
        for i, p in enumerate(preset_recipes(), start=1):
            if p.name.lower() == preset.lower():
                return Recipe(id=i, **p.model_dump())
        return None
    db = await init_db()
    try:
        return await MongoRecipeStore(db).get_recipe(recipe_id)
    finally:
        await close_db()

async def follow(recipe: Recipe, scale: float = 1.0, tick: float = 1.0, timer: Optional[BrewTimer] = None) -> None:
    timer = timer or BrewTimer()
    timer.start()
    print(f"{recipe.name} - {recipe.totalTime}s, scale x{scale:g}")
    while True:
        st = brew_status(recipe, timer.elapsed, scale)
        print(f"{st.clock:>6}  target {st.targetWeight:6.1f} g  [{st.progress:5.1f}%]")
        if st.finished:
            break
        await asyncio.sleep(tick)
    timer.pause()
    print("done")

async def main() -> None:
    ap = argparse.ArgumentParser(description="Follow a pour-over recipe in the terminal")
    src = ap.add_mutually_exclusive_group(required=True)
    src.add_argument("--id", type=int, help="stored recipe id")
    src.add_argument("--preset", help="built-in recipe name")
    ap.add_argument("--scale", type=float, default=1.0)
    ap.add_argument("--tick", type=float, default=1.0)
    args = ap.parse_args()

    if args.scale <= 0:
        ap.error("--scale must be positive")

    recipe = await _load(args.id, args.preset)
    if recipe is None:
        ap.error("recipe not found")
    await follow(recipe, scale=args.scale, tick=args.tick)

if __name__ == "__main__":
    asyncio.run(main())
