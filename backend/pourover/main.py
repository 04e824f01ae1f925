# pourover/main.py
# FastAPI app setup and router wiring
# Routers live one per feature under pourover/api.

from __future__ import annotations

import logging
from asyncio import sleep

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pourover.api.routes_brew import router as brew_router       # scaled copy / live target / chart
from pourover.api.routes_recipes import router as recipes_router # recipe CRUD
from pourover.core.config import settings
from pourover.core.deps import get_store, set_store
from pourover.db.indexes import ensure_indexes
from pourover.db.init import close_db, init_db
from pourover.db.store import MemoryRecipeStore, MongoRecipeStore, RecipeStore, seed_presets

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
log = logging.getLogger(__name__)

app = FastAPI(title="Pour Over Timer - API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(RequestValidationError)
async def on_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    # 400 instead of FastAPI's 422, same body shape for every route
    is_write = request.method in ("POST", "PATCH", "PUT")
    return JSONResponse(
        status_code=400,
        content={
            "detail": "Invalid recipe data" if is_write else "Invalid request",
            "errors": jsonable_encoder(exc.errors()),
        },
    )

async def _connect_mongo() -> RecipeStore | None:
    # up to DB_INIT_RETRIES attempts, DB_INIT_DELAY apart
    for i in range(settings.DB_INIT_RETRIES):
        try:
            db = await init_db()
            log.info("[startup] db ready")
            break
        except Exception as e:
            log.warning("[startup] db init retry %d: %s", i + 1, e)
            await sleep(settings.DB_INIT_DELAY)
    else:
        log.error("[startup] db init failed after retries")
        return None

    try:
        await ensure_indexes(db)
        log.info("[startup] indexes ensured")
    except Exception as e:
        log.error("[startup] ensure_indexes failed: %s", e)
    return MongoRecipeStore(db)

@app.on_event("startup")
async def on_startup() -> None:
    if settings.STORAGE == "memory":
        store: RecipeStore | None = MemoryRecipeStore()
        log.info("[startup] using in-memory recipe store")
    else:
        store = await _connect_mongo()
        if store is None:
            return

    if settings.SEED_PRESETS:
        try:
            await seed_presets(store)
        except Exception as e:
            log.error("[startup] preset seeding failed: %s", e)
    set_store(store)

@app.on_event("shutdown")
async def on_shutdown() -> None:
    set_store(None)
    await close_db()

@app.get("/")
async def root():
    return {"status": "ok"}

@app.get("/health")
async def health():
    ok = {"status": "ok", "db": "skip"}
    try:
        store = get_store()
    except HTTPException:
        ok["db"] = "not ready"
        return ok
    try:
        await store.ping()
        ok["db"] = "ok"
    except Exception as e:
        ok["db"] = f"error: {e}"
    return ok

# prefixes are defined in each router file, no duplicates here
app.include_router(recipes_router)
app.include_router(brew_router)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("pourover.main:app", host="0.0.0.0", port=5000)
