# Shared dependencies (active recipe store)
from typing import Optional

from fastapi import HTTPException

from pourover.db.store import RecipeStore

_store: Optional[RecipeStore] = None

def set_store(store: Optional[RecipeStore]) -> None:
    # startup installs the store, shutdown clears it
    global _store
    _store = store

def get_store() -> RecipeStore:
    if _store is None:
        raise HTTPException(status_code=503, detail="Recipe store is not ready")
    return _store
