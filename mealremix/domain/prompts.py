import json

from mealremix.domain.models import Recipe


REMIX_SYSTEM_PROMPT = (
    "You are a playful, concise, and helpful recipe remixing assistant."
)

REMIX_INSTRUCTIONS = """
Please produce a short, fun, creative, and totally doable remix of the recipe.
Highlight any changed ingredients (bullet list) and changed or new cooking steps.
Keep it concise and actionable so someone can follow it in the kitchen.
If nothing needs to change for the theme, say so and offer one optional twist.
Only return the remixed recipe (no extraneous commentary).""".strip()

REMIX_PROMPT = """Here is a recipe in JSON format:
{recipe}

Remix theme: "{theme}"

{instructions}"""


class RemixPrompt:
    def __init__(
        self,
        recipe: Recipe,
        theme: str,
        instructions: str | None = None,
    ) -> None:
        self.recipe = recipe
        self.theme = theme
        self.instructions = REMIX_INSTRUCTIONS if instructions is None else instructions

    def __str__(self) -> str:
        return REMIX_PROMPT.format(
            recipe=json.dumps(self.recipe.to_dict(), indent=2, ensure_ascii=False),
            theme=self.theme,
            instructions=self.instructions,
        )
