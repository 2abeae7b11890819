import logging
from typing import Any

import httpx

from mealremix.domain.errors import NetworkError, NotFoundError
from mealremix.domain.models import Meal, Recipe


logger = logging.getLogger(__name__)


BASE_URL = "https://www.themealdb.com/api/json/v1/1/"
TIMEOUT = 20


class MealDBClient:
    """Client for the public TheMealDB catalog."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        base_url: str = BASE_URL,
    ) -> None:
        self.aclient = (
            httpx.AsyncClient(base_url=base_url, timeout=TIMEOUT)
            if client is None
            else client
        )

    async def _meals(self, path: str, params: dict[str, Any] | None = None) -> list[Meal]:
        try:
            resp = await self.aclient.get(path, params=params)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPError as e:
            raise NetworkError(f"MealDB request to {path} failed: {e!r}") from e
        except ValueError as e:
            raise NetworkError(f"MealDB returned a malformed body for {path}") from e

        meals = data.get("meals") if isinstance(data, dict) else None
        return meals if isinstance(meals, list) else []

    async def fetch_random(self) -> Recipe:
        meals = await self._meals("random.php")
        if not meals:
            raise NotFoundError("No recipe returned from MealDB.")
        return Recipe.from_meal(meals[0])

    async def fetch_by_name(self, name: str) -> Recipe | None:
        """First recipe matching `name`, or None without a request if `name` is empty."""
        if not name:
            return None
        logger.info("Searching MealDB for %r", name)
        meals = await self._meals("search.php", params={"s": name})
        if not meals:
            raise NotFoundError(name)
        return Recipe.from_meal(meals[0])

    async def close(self) -> None:
        await self.aclient.aclose()
