import contextlib
import functools
import logging
import uuid
from typing import Any, AsyncIterator, Awaitable, Callable
from urllib.parse import urlencode

from databases import Database
from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup
from rich.logging import RichHandler
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import FileResponse, HTMLResponse
from starlette.routing import Mount, Route, WebSocketRoute
from starlette.staticfiles import StaticFiles
from starlette.websockets import WebSocket

from mealremix import config
from mealremix.db import KeyValueStore
from mealremix.domain.aopenai import openai_client
from mealremix.domain.errors import PersistenceError
from mealremix.domain.llm_service import LLMService
from mealremix.domain.mealdb import MealDBClient
from mealremix.domain.repository import SavedRecipesRepository
from mealremix.viewer import PageViewers, RecipeViewer


logger = logging.getLogger(__name__)


CONFIG = config.Config()


TEMPLATES = Environment(
    loader=FileSystemLoader(CONFIG.html_dir),
    autoescape=select_autoescape(),
)


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=CONFIG.log_level if level is None else level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
    )


@contextlib.asynccontextmanager
async def lifespan(app: Starlette) -> AsyncIterator[None]:
    configure_logging()
    db = Database(CONFIG.db_url)
    await db.connect()
    store = KeyValueStore(db)
    try:
        await store.create()
    except PersistenceError:
        logger.exception("Could not create DB.")

    catalog = MealDBClient(base_url=CONFIG.mealdb_url)
    llm = LLMService(
        http_client=openai_client(CONFIG.openai_api_key, base_url=CONFIG.openai_url),
        model=CONFIG.remix_model,
        temperature=CONFIG.remix_temperature,
        max_tokens=CONFIG.remix_max_tokens,
    )
    app.state.viewers = PageViewers(
        functools.partial(
            RecipeViewer,
            catalog=catalog,
            remixer=llm,
            saved=SavedRecipesRepository(store),
            environment=TEMPLATES,
            default_theme=CONFIG.default_theme,
        )
    )
    try:
        yield
    finally:
        await catalog.close()
        await llm.close()
        await db.disconnect()


def aHTMLResponse(route: Callable[..., Awaitable[str | tuple[str, int]]]):
    @functools.wraps(route)
    async def wrapper(*args: Any, **kwargs: Any) -> HTMLResponse:
        resp = await route(*args, **kwargs)
        if not isinstance(resp, tuple):
            html, code = resp, 200
        else:
            html, code = resp
        return HTMLResponse(html, status_code=code)

    return wrapper


def socket_element(id: str, url: str = "", *, oob: bool = False) -> str:
    """Div that opens a websocket to `url`; without `url` it retires the socket."""
    return TEMPLATES.get_template("socket.html").render(id=id, url=url, oob=oob)


def socket_url(path: str, **params: str) -> str:
    return f"{path}?{urlencode(params)}"


async def stream(ws: WebSocket, fragments: AsyncIterator[str], socket_id: str) -> None:
    await ws.accept()
    async for fragment in fragments:
        await ws.send_text(fragment)
    await ws.send_text(socket_element(socket_id, oob=True))
    await ws.close()


def viewer_of(conn: Request | WebSocket, page: str | None = None) -> RecipeViewer:
    """The viewer of the page that sent `conn`, by its `page` parameter."""
    viewers: PageViewers = conn.app.state.viewers
    return viewers[conn.query_params.get("page", "") if page is None else page]


async def form_fields(request: Request, *names: str) -> dict[str, str | None]:
    async with request.form() as form:
        values = {name: form.get(name) for name in names}
    return {k: v if isinstance(v, str) else None for k, v in values.items()}


async def favicon(request: Request) -> FileResponse:
    return FileResponse(CONFIG.images_dir / "favicon.svg", media_type="image/svg+xml")


@aHTMLResponse
async def homepage(request: Request) -> str:
    page = uuid.uuid4().hex
    saved = await viewer_of(request, page).saved_list()
    return TEMPLATES.get_template("index.html").render(
        page=page,
        saved=Markup(saved),
        themes=CONFIG.themes,
        default_theme=CONFIG.default_theme,
    )


@aHTMLResponse
async def random_recipe(request: Request) -> str:
    page = request.query_params.get("page", "")
    return socket_element("recipe-ws", socket_url("/ws/recipes/random", page=page))


@aHTMLResponse
async def recipe_by_name(request: Request) -> str:
    page = request.query_params.get("page", "")
    name = request.query_params.get("name", "")
    return socket_element(
        "recipe-ws", socket_url("/ws/recipes/by-name", page=page, name=name)
    )


@aHTMLResponse
async def remix(request: Request) -> str:
    fields = await form_fields(request, "page", "theme")
    return socket_element(
        "remix-ws",
        socket_url("/ws/remix", page=fields["page"] or "", theme=fields["theme"] or ""),
    )


async def random_recipe_ws(ws: WebSocket) -> None:
    await stream(ws, viewer_of(ws).show_random(), "recipe-ws")


async def recipe_by_name_ws(ws: WebSocket) -> None:
    name = ws.query_params.get("name", "")
    await stream(ws, viewer_of(ws).show_saved(name), "recipe-ws")


async def remix_ws(ws: WebSocket) -> None:
    theme = ws.query_params.get("theme")
    await stream(ws, viewer_of(ws).remix_current(theme), "remix-ws")


@aHTMLResponse
async def saved(request: Request) -> str:
    return await viewer_of(request).saved_list()


@aHTMLResponse
async def save(request: Request) -> str:
    fields = await form_fields(request, "page")
    return await viewer_of(request, fields["page"] or "").save_current()


@aHTMLResponse
async def delete_saved(request: Request) -> str:
    fields = await form_fields(request, "page", "name")
    viewer = viewer_of(request, fields["page"] or "")
    name = fields["name"]
    if name is None:
        return await viewer.saved_list(), 400
    return await viewer.delete_saved(name)


app = Starlette(
    debug=True if CONFIG.env == config.Env.local else False,
    routes=[
        Route("/", homepage),
        Route("/recipes/random", random_recipe, methods=["GET"]),
        Route("/recipes/by-name", recipe_by_name, methods=["GET"]),
        WebSocketRoute("/ws/recipes/random", random_recipe_ws),
        WebSocketRoute("/ws/recipes/by-name", recipe_by_name_ws),
        Route("/remix", remix, methods=["POST"]),
        WebSocketRoute("/ws/remix", remix_ws),
        Route("/saved", saved, methods=["GET"]),
        Route("/saved", save, methods=["POST"]),
        Route("/saved/delete", delete_saved, methods=["POST"]),
        Route("/favicon.ico", favicon),
        Mount("/assets", StaticFiles(directory=config.ASSETS_DIR)),
    ],
    lifespan=lifespan,
)
