from jinja2 import Environment
from markdown2 import (  # pyright: ignore[reportMissingTypeStubs]
    markdown,  # pyright: ignore[reportUnknownVariableType]
)
from markupsafe import Markup


class RemixResult:
    def __init__(
        self,
        text: str,
        *,
        environment: Environment,
        template_name: str = "remix-output.html",
    ) -> None:
        self.text = text
        self.env = environment
        self.name = template_name

    @property
    def content(self) -> Markup:
        # The text comes from a model, so any raw html in it is escaped.
        return Markup(
            markdown(  # pyright: ignore[reportUnknownArgumentType]
                self.text,
                safe_mode="escape",
                extras={"breaks": {"on_newline": True}, "fences": None, "tables": None},
            )
        )

    def render(self) -> str:
        return self.env.get_template(self.name).render(remix=self)
