"""
shopfront/core/dependencies.py - FastAPI dependencies.

The store is built once in `create_app()` and parked on `app.state`; routes receive it
with `Depends(get_store)` instead of importing a module-level instance.
"""
from fastapi import Request

from shopfront.services.store import MemoryStore


def get_store(request: Request) -> MemoryStore:
    return request.app.state.store
