import json
import logging
from typing import Protocol

from mealremix.domain.errors import PersistenceError


logger = logging.getLogger(__name__)


SAVED_RECIPES_KEY = "savedRecipes"


class Store(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...


def dumps(names: list[str]) -> str:
    # Same text as JSON.stringify so rewriting an unchanged list is a no-op.
    return json.dumps(names, separators=(",", ":"), ensure_ascii=False)


def loads(raw: str) -> list[str]:
    names = json.loads(raw)
    if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
        raise ValueError(f"Expected a list of strings, got: {raw[:80]}")
    return names


class SavedRecipesRepository:
    """Names of the recipes the user saved, in the order they were saved."""

    def __init__(self, store: Store, *, key: str = SAVED_RECIPES_KEY) -> None:
        self.store = store
        self.key = key

    async def load(self) -> list[str]:
        try:
            raw = await self.store.get(self.key)
            return loads(raw) if raw else []
        except (PersistenceError, ValueError) as e:
            logger.warning("Error reading saved recipes: %r", e)
            return []

    async def save(self, names: list[str]) -> None:
        try:
            await self.store.set(self.key, dumps(names))
        except PersistenceError as e:
            logger.warning("Error saving recipes: %r", e)

    async def add(self, name: str) -> None:
        names = await self.load()
        if name in names:
            return
        names.append(name)
        await self.save(names)

    async def remove(self, name: str) -> None:
        names = await self.load()
        await self.save([n for n in names if n != name])
