"""
Recipe store tests
MemoryRecipeStore directly, MongoRecipeStore against motor-shaped mocks
"""
import pytest
from unittest.mock import AsyncMock, MagicMock

from pourover.db.indexes import ensure_indexes
from pourover.db.store import MemoryRecipeStore, MongoRecipeStore, seed_presets
from pourover.models.schemas import RecipeIn


def _recipe_in(name="Test", points=None):
    return RecipeIn(
        name=name,
        description=None,
        totalTime=120,
        targetPoints=points or [{"time": 0, "weight": 0}, {"time": 120, "weight": 240}],
    )


@pytest.fixture
def store():
    return MemoryRecipeStore()


class TestMemoryRecipeStore:

    @pytest.mark.asyncio
    async def test_seeded_presets(self):
        s = MemoryRecipeStore(seed=True)
        names = [r.name for r in await s.list_recipes()]
        assert names == ["Classic V60", "Fast Flow"]

    @pytest.mark.asyncio
    async def test_create_assigns_serial_ids(self, store):
        a = await store.create_recipe(_recipe_in("a"))
        b = await store.create_recipe(_recipe_in("b"))
        assert (a.id, b.id) == (1, 2)
        assert await store.get_recipe(2) == b

    @pytest.mark.asyncio
    async def test_ids_not_reused_after_delete(self, store):
        a = await store.create_recipe(_recipe_in("a"))
        assert await store.delete_recipe(a.id)
        b = await store.create_recipe(_recipe_in("b"))
        assert b.id == 2
        assert await store.get_recipe(a.id) is None

    @pytest.mark.asyncio
    async def test_update_replaces_snapshot(self, store):
        a = await store.create_recipe(_recipe_in("a"))
        updated = await store.update_recipe(a.id, _recipe_in("renamed"))
        assert updated.id == a.id
        assert updated.name == "renamed"
        # the earlier snapshot is untouched
        assert a.name == "a"

    @pytest.mark.asyncio
    async def test_update_missing(self, store):
        assert await store.update_recipe(42, _recipe_in()) is None

    @pytest.mark.asyncio
    async def test_delete_missing(self, store):
        assert await store.delete_recipe(42) is False

    @pytest.mark.asyncio
    async def test_seed_only_into_empty_store(self, store):
        assert await seed_presets(store) == 2
        assert await seed_presets(store) == 0
        assert await store.count() == 2


def _mongo():
    coll = MagicMock()
    counters = MagicMock()
    db = MagicMock()
    db.__getitem__.side_effect = lambda name: {"recipes": coll, "counters": counters}[name]
    db.command = AsyncMock(return_value={"ok": 1})
    return db, coll, counters


def _doc(rid=1, name="Test"):
    return {
        "id": rid,
        "name": name,
        "description": None,
        "totalTime": 120,
        "targetPoints": [{"time": 0, "weight": 0}, {"time": 120, "weight": 240}],
    }


class TestMongoRecipeStore:

    @pytest.mark.asyncio
    async def test_create_uses_counter(self):
        db, coll, counters = _mongo()
        counters.find_one_and_update = AsyncMock(return_value={"_id": "recipes", "seq": 3})
        coll.insert_one = AsyncMock()

        recipe = await MongoRecipeStore(db).create_recipe(_recipe_in())

        assert recipe.id == 3
        inserted = coll.insert_one.await_args.args[0]
        assert inserted["id"] == 3
        assert "_id" not in inserted
        filt, update = counters.find_one_and_update.await_args.args
        assert filt == {"_id": "recipes"}
        assert update == {"$inc": {"seq": 1}}

    @pytest.mark.asyncio
    async def test_list_sorted_without_object_id(self):
        db, coll, _ = _mongo()
        cursor = MagicMock()
        cursor.sort.return_value = cursor
        cursor.to_list = AsyncMock(return_value=[_doc(1), _doc(2, "b")])
        coll.find.return_value = cursor

        recipes = await MongoRecipeStore(db).list_recipes()

        assert [r.id for r in recipes] == [1, 2]
        coll.find.assert_called_once_with({}, {"_id": 0})
        cursor.sort.assert_called_once_with("id", 1)

    @pytest.mark.asyncio
    async def test_get_missing(self):
        db, coll, _ = _mongo()
        coll.find_one = AsyncMock(return_value=None)
        assert await MongoRecipeStore(db).get_recipe(9) is None

    @pytest.mark.asyncio
    async def test_update_returns_new_snapshot(self):
        db, coll, _ = _mongo()
        coll.find_one_and_update = AsyncMock(return_value=_doc(4, "renamed"))
        recipe = await MongoRecipeStore(db).update_recipe(4, _recipe_in("renamed"))
        assert recipe.name == "renamed"
        assert coll.find_one_and_update.await_args.args[0] == {"id": 4}

    @pytest.mark.asyncio
    async def test_delete_reports_missing(self):
        db, coll, _ = _mongo()
        coll.delete_one = AsyncMock(return_value=MagicMock(deleted_count=0))
        assert await MongoRecipeStore(db).delete_recipe(5) is False

    @pytest.mark.asyncio
    async def test_ping(self):
        db, _, _ = _mongo()
        await MongoRecipeStore(db).ping()
        db.command.assert_awaited_once_with("ping")


@pytest.mark.asyncio
async def test_ensure_indexes_recreates_non_unique_id():
    db, coll, _ = _mongo()
    coll.index_information = AsyncMock(return_value={
        "_id_": {"key": [("_id", 1)]},
        "id_1": {"key": [("id", 1)]},
    })
    coll.drop_index = AsyncMock()
    coll.create_index = AsyncMock()

    await ensure_indexes(db)

    coll.drop_index.assert_awaited_once_with("id_1")
    created = [c.kwargs["name"] for c in coll.create_index.await_args_list]
    assert created == ["id_1", "name_1"]
