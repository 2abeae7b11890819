from typing import Any


MAX_INGREDIENTS = 20


type Meal = dict[str, Any]


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


class Ingredient:
    def __init__(self, name: str, measure: str = "") -> None:
        self.name = name
        self.measure = measure

    def __repr__(self) -> str:
        return f"<Ingredient(name={self.name}, measure={self.measure})>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ingredient):
            return NotImplemented
        return (self.name, self.measure) == (other.name, other.measure)

    @property
    def line(self) -> str:
        return f"{self.measure} {self.name}" if self.measure else self.name


def ingredients_from_meal(meal: Meal) -> list[Ingredient]:
    """Ingredient slots 1..20 in order, skipping blank ones."""
    ingredients: list[Ingredient] = []
    for i in range(1, MAX_INGREDIENTS + 1):
        name = _text(meal.get(f"strIngredient{i}"))
        if not name:
            continue
        ingredients.append(Ingredient(name, _text(meal.get(f"strMeasure{i}"))))
    return ingredients


class Recipe:
    def __init__(
        self,
        *,
        id: str,
        name: str,
        thumbnail: str,
        instructions: str,
        ingredients: list[Ingredient],
        category: str = "",
        area: str = "",
        tags: list[str] | None = None,
        source: str = "",
        youtube: str = "",
    ) -> None:
        self.id = id
        self.name = name
        self.thumbnail = thumbnail
        self.instructions = instructions
        self.ingredients = ingredients
        self.category = category
        self.area = area
        self.tags = [] if tags is None else tags
        self.source = source
        self.youtube = youtube

    @classmethod
    def from_meal(cls, meal: Meal) -> "Recipe":
        tags = [t.strip() for t in _text(meal.get("strTags")).split(",") if t.strip()]
        return cls(
            id=_text(meal.get("idMeal")),
            name=_text(meal.get("strMeal")),
            thumbnail=_text(meal.get("strMealThumb")),
            instructions=meal.get("strInstructions") or "",
            ingredients=ingredients_from_meal(meal),
            category=_text(meal.get("strCategory")),
            area=_text(meal.get("strArea")),
            tags=tags,
            source=_text(meal.get("strSource")),
            youtube=_text(meal.get("strYoutube")),
        )

    def __repr__(self) -> str:
        return f"<Recipe(id={self.id}, name={self.name})>"

    def __str__(self) -> str:
        return self.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "category": self.category,
            "area": self.area,
            "tags": self.tags,
            "ingredients": [i.line for i in self.ingredients],
            "instructions": self.instructions,
        }
