from jinja2 import Environment
from markupsafe import Markup

from mealremix.domain.models import Recipe


class RecipeDetail:
    def __init__(
        self,
        recipe: Recipe,
        *,
        environment: Environment,
        template_name: str = "recipe-display.html",
    ) -> None:
        self.recipe = recipe
        self.env = environment
        self.name = template_name

    @property
    def title(self) -> str:
        return self.recipe.name

    @property
    def image(self) -> str:
        return self.recipe.thumbnail

    @property
    def meta(self) -> str:
        return " · ".join(p for p in (self.recipe.category, self.recipe.area) if p)

    @property
    def ingredients(self) -> list[str]:
        return [i.line for i in self.recipe.ingredients]

    @property
    def instructions(self) -> Markup:
        return Markup("<br>").join(self.recipe.instructions.splitlines())

    def render(self) -> str:
        return self.env.get_template(self.name).render(recipe=self)
