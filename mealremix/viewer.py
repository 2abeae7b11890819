"""Holds the recipe on screen and turns user actions into html fragments.

Actions that wait on the network are async generators. The first fragment is
a loading placeholder, the last one the outcome. Every fragment carries
`hx-swap-oob` so it can be pushed to the page as is.
"""

from collections import OrderedDict
from enum import Enum
import logging
from typing import AsyncIterator, Callable, Protocol

from jinja2 import Environment

from mealremix.domain.errors import NotFoundError
from mealremix.domain.models import Recipe
from mealremix.domain.repository import SavedRecipesRepository
from mealremix.html.recipe_detail import RecipeDetail
from mealremix.html.remix_result import RemixResult
from mealremix.html.saved_list import SavedList


logger = logging.getLogger(__name__)


DEFAULT_THEME = "Make it interesting"
MAX_PAGES = 256

LOADING = "Loading..."
LOADING_RECIPE = "Loading recipe..."
LOAD_FAILED = "Sorry, couldn't load a recipe."
LOAD_SAVED_FAILED = (
    "Sorry, could not load that recipe right now. Please try again later."
)
NOT_FOUND = 'Sorry, I couldn\'t find the recipe "{name}".'
SAVE_FIRST = "Please load a recipe before saving."
REMIX_FIRST = 'Please load a recipe first (click "Surprise Me Again!").'
REMIXING = "Stirring the idea pot... your remix is being prepared 🥄"
REMIX_FAILED = (
    "Sorry, I couldn't prepare a remix just now. Please try again in a moment."
)


class ViewState(Enum):
    idle = "idle"
    loading = "loading"
    displayed = "displayed"
    error = "error"


class Catalog(Protocol):
    async def fetch_random(self) -> Recipe: ...

    async def fetch_by_name(self, name: str) -> Recipe | None: ...


class Remixer(Protocol):
    async def remix(self, recipe: Recipe, theme: str) -> str: ...


class RecipeViewer:
    def __init__(
        self,
        *,
        catalog: Catalog,
        remixer: Remixer,
        saved: SavedRecipesRepository,
        environment: Environment,
        default_theme: str = DEFAULT_THEME,
    ) -> None:
        self.catalog = catalog
        self.remixer = remixer
        self.saved = saved
        self.env = environment
        self.default_theme = default_theme
        self.current: Recipe | None = None
        self.state = ViewState.idle

    def _recipe_message(self, message: str) -> str:
        return self.env.get_template("recipe-display.html").render(message=message)

    def _remix_message(self, message: str) -> str:
        return self.env.get_template("remix-output.html").render(message=message)

    def _display(self, recipe: Recipe) -> str:
        self.current = recipe
        self.state = ViewState.displayed
        return RecipeDetail(recipe, environment=self.env).render()

    async def show_random(self) -> AsyncIterator[str]:
        self.state = ViewState.loading
        yield self._recipe_message(LOADING)
        try:
            recipe = await self.catalog.fetch_random()
        except Exception:
            logger.exception("Error fetching a random recipe")
            self.state = ViewState.error
            yield self._recipe_message(LOAD_FAILED)
            return
        yield self._display(recipe)

    async def show_saved(self, name: str) -> AsyncIterator[str]:
        if not name:
            return
        self.state = ViewState.loading
        yield self._recipe_message(LOADING_RECIPE)
        try:
            recipe = await self.catalog.fetch_by_name(name)
        except NotFoundError:
            logger.info("No recipe named %r", name)
            self.state = ViewState.idle
            yield self._recipe_message(NOT_FOUND.format(name=name))
            return
        except Exception:
            logger.exception("Error fetching recipe by name %r", name)
            self.state = ViewState.error
            yield self._recipe_message(LOAD_SAVED_FAILED)
            return
        if recipe is not None:
            yield self._display(recipe)

    async def saved_list(self) -> str:
        names = await self.saved.load()
        return SavedList(names, environment=self.env).render()

    async def save_current(self) -> str:
        if self.current is None or not self.current.name:
            notice = self.env.get_template("notice.html").render(
                target="recipe-display", message=SAVE_FIRST
            )
            return await self.saved_list() + notice
        await self.saved.add(self.current.name)
        return await self.saved_list()

    async def delete_saved(self, name: str) -> str:
        await self.saved.remove(name)
        return await self.saved_list()

    async def remix_current(self, theme: str | None = None) -> AsyncIterator[str]:
        recipe = self.current
        if recipe is None:
            yield self._remix_message(REMIX_FIRST)
            return

        theme = (theme or "").strip() or self.default_theme
        yield self._remix_message(REMIXING)
        try:
            text = await self.remixer.remix(recipe, theme)
        except Exception:
            logger.exception("Remix error")
            yield self._remix_message(REMIX_FAILED)
            return
        yield RemixResult(text, environment=self.env).render()


class PageViewers:
    """One `RecipeViewer` per open page, so each page keeps its own current recipe.

    The least recently used pages are forgotten once there are more than
    `max_pages` of them.
    """

    def __init__(
        self,
        factory: Callable[[], RecipeViewer],
        *,
        max_pages: int = MAX_PAGES,
    ) -> None:
        self.factory = factory
        self.max_pages = max_pages
        self._viewers: OrderedDict[str, RecipeViewer] = OrderedDict()

    def __len__(self) -> int:
        return len(self._viewers)

    def __contains__(self, page: str) -> bool:
        return page in self._viewers

    def __getitem__(self, page: str) -> RecipeViewer:
        viewer = self._viewers.pop(page, None)
        if viewer is None:
            viewer = self.factory()
        self._viewers[page] = viewer
        while len(self._viewers) > self.max_pages:
            self._viewers.popitem(last=False)
        return viewer
