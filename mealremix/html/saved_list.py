from jinja2 import Environment


class SavedList:
    def __init__(
        self,
        names: list[str],
        *,
        environment: Environment,
        template_name: str = "saved-list.html",
    ) -> None:
        self.names = names
        self.env = environment
        self.name = template_name

    @property
    def hidden(self) -> bool:
        return not self.names

    def render(self) -> str:
        return self.env.get_template(self.name).render(saved=self)
