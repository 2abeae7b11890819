import functools
from typing import Any

import pytest
from jinja2 import Environment

from mealremix.app import TEMPLATES
from mealremix.domain.errors import NotFoundError, PersistenceError
from mealremix.domain.models import Recipe
from mealremix.domain.repository import SavedRecipesRepository
from mealremix.viewer import PageViewers, RecipeViewer


LASAGNE: dict[str, Any] = {
    "idMeal": "52844",
    "strMeal": "Lasagne",
    "strCategory": "Pasta",
    "strArea": "Italian",
    "strTags": "Pasta, Baking",
    "strMealThumb": "https://www.themealdb.com/images/media/meals/wtsvxx1511296896.jpg",
    "strInstructions": "Heat the oil.\r\nLayer the pasta.\nBake for 25 mins.",
    "strYoutube": "",
    "strSource": None,
    "strIngredient1": "Olive Oil",
    "strMeasure1": "1 tblsp ",
    "strIngredient2": "Bacon",
    "strMeasure2": "2",
    "strIngredient3": "   ",
    "strMeasure3": "1 pinch",
    "strIngredient4": "Lasagne Sheets",
    "strMeasure4": "",
    "strIngredient5": None,
    "strMeasure5": None,
    "strIngredient6": "Mozzarella",
    "strMeasure6": "125g",
    **{f"strIngredient{i}": "" for i in range(7, 21)},
    **{f"strMeasure{i}": " " for i in range(7, 21)},
}


CURRY: dict[str, Any] = {
    "idMeal": "52772",
    "strMeal": "Chicken Curry",
    "strMealThumb": "https://example.com/curry.jpg",
    "strInstructions": "Cook it.",
    "strIngredient1": "Chicken",
    "strMeasure1": "500g",
}


class MemoryStore:
    def __init__(self, data: dict[str, str] | None = None) -> None:
        self.data = {} if data is None else data
        self.writes = 0

    async def get(self, key: str) -> str | None:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.writes += 1
        self.data[key] = value


class BrokenStore:
    async def get(self, key: str) -> str | None:
        raise PersistenceError(f"Could not read {key!r}.")

    async def set(self, key: str, value: str) -> None:
        raise PersistenceError(f"Could not write {key!r}.")


class FakeCatalog:
    def __init__(self) -> None:
        self.random: Recipe | Exception = Recipe.from_meal(LASAGNE)
        self.recipes = {
            "Lasagne": Recipe.from_meal(LASAGNE),
            "Chicken Curry": Recipe.from_meal(CURRY),
        }
        self.calls: list[str] = []

    async def fetch_random(self) -> Recipe:
        self.calls.append("random")
        if isinstance(self.random, Exception):
            raise self.random
        return self.random

    async def fetch_by_name(self, name: str) -> Recipe | None:
        if not name:
            return None
        self.calls.append(name)
        if name not in self.recipes:
            raise NotFoundError(name)
        return self.recipes[name]


class FakeRemixer:
    def __init__(self, reply: str | Exception = "Swap the bacon for mushrooms.") -> None:
        self.reply = reply
        self.calls: list[tuple[Recipe, str]] = []

    async def remix(self, recipe: Recipe, theme: str) -> str:
        self.calls.append((recipe, theme))
        if isinstance(self.reply, Exception):
            raise self.reply
        return self.reply


@pytest.fixture
def lasagne() -> dict[str, Any]:
    return dict(LASAGNE)


@pytest.fixture
def recipe() -> Recipe:
    return Recipe.from_meal(LASAGNE)


@pytest.fixture
def environment() -> Environment:
    return TEMPLATES


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def broken_store() -> BrokenStore:
    return BrokenStore()


@pytest.fixture
def catalog() -> FakeCatalog:
    return FakeCatalog()


@pytest.fixture
def remixer() -> FakeRemixer:
    return FakeRemixer()


@pytest.fixture
def viewer(
    catalog: FakeCatalog,
    remixer: FakeRemixer,
    store: MemoryStore,
    environment: Environment,
) -> RecipeViewer:
    return RecipeViewer(
        catalog=catalog,
        remixer=remixer,
        saved=SavedRecipesRepository(store),
        environment=environment,
    )


@pytest.fixture
def viewers(
    catalog: FakeCatalog,
    remixer: FakeRemixer,
    store: MemoryStore,
    environment: Environment,
) -> PageViewers:
    return PageViewers(
        functools.partial(
            RecipeViewer,
            catalog=catalog,
            remixer=remixer,
            saved=SavedRecipesRepository(store),
            environment=environment,
        )
    )
