import contextlib
import functools
import logging
from typing import Any, AsyncIterator, Awaitable, Callable
from urllib.parse import urlencode

from databases import Database
from jinja2 import Environment
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import FileResponse, HTMLResponse, RedirectResponse
from starlette.routing import Mount, Route
from starlette.staticfiles import StaticFiles

from cookbook import config, db
from cookbook.domain.drafts import RecipeDraft
from cookbook.domain.errors import (
    DatastoreError,
    IngredientsCreateFailed,
    InvalidDraft,
    RecipeCreateFailed,
)
from cookbook.domain.filters import RecipeFilter
from cookbook.domain.repository import RecipeRepository
from cookbook.domain.services import (
    create_recipe,
    featured_recipes,
    has_title_match,
    load_recipe_detail,
    search_recipes,
)
from cookbook.html import environment_factory
from cookbook.html.landing import NO_MATCH_ALERT, SEARCH_FAILED_ALERT, Landing
from cookbook.html.page import Notification
from cookbook.html.recipe_detail import RecipeDetail
from cookbook.html.recipe_form import RecipeForm
from cookbook.html.recipe_list import RecipeList
from cookbook.logs import setup_logging


logger = logging.getLogger(__name__)


CREATED_NOTICE = "created"


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


def _config(request: Request) -> config.Config:
    return request.app.state.config


def _templates(request: Request) -> Environment:
    return request.app.state.templates


def _repo(request: Request) -> RecipeRepository:
    return request.app.state.repo


async def favicon(request: Request) -> FileResponse:
    return FileResponse(
        _config(request).images_dir / "favicon.svg", media_type="image/svg+xml"
    )


async def _landing(request: Request, *, search: str = "", alert: str | None = None) -> str:
    cfg = _config(request)
    featured = await featured_recipes(repository=_repo(request), n=cfg.featured_count)
    return Landing(
        featured,
        environment=_templates(request),
        placeholder_image=cfg.placeholder_image,
        search=search,
        alert=alert,
        path=request.url.path,
    ).render()


async def homepage(request: Request) -> HTMLResponse | RedirectResponse:
    match request.method.lower():
        case "get":
            return HTMLResponse(await _landing(request))
        case "post":
            async with request.form() as form:
                search = str(form.get("search", ""))
            if not search.strip():
                return HTMLResponse(await _landing(request))

            try:
                found = await has_title_match(search, repository=_repo(request))
            except DatastoreError:
                logger.exception("Title search for %r failed", search)
                return HTMLResponse(
                    await _landing(request, search=search, alert=SEARCH_FAILED_ALERT)
                )

            if found:
                return RedirectResponse(
                    f"/recipes?{urlencode({'search': search})}", status_code=303
                )
            return HTMLResponse(
                await _landing(request, search=search, alert=NO_MATCH_ALERT)
            )
        case _:
            raise ValueError("Unsupported method.")


async def _recipe_list(request: Request) -> RecipeList:
    cfg = _config(request)
    filter = RecipeFilter.from_params(
        request.query_params,
        calories_span=(0.0, cfg.calories_max),
        protein_span=(0.0, cfg.protein_max),
    )
    recipes = await search_recipes(filter, repository=_repo(request))
    return RecipeList(
        filter,
        recipes,
        environment=_templates(request),
        placeholder_image=cfg.placeholder_image,
        path="/recipes",
    )


@aHTMLResponse
async def recipes(request: Request) -> tuple[str, int]:
    page = await _recipe_list(request)
    return page.render(), page.status_code


@aHTMLResponse
async def recipe_results(request: Request) -> str:
    """Card grid only, swapped in by htmx whenever a filter changes.

    Always 200: htmx drops non-2xx responses, and the error block has to
    replace the previous cards.
    """
    page = await _recipe_list(request)
    return page.render_results()


@aHTMLResponse
async def recipe_detail(request: Request) -> tuple[str, int]:
    id = request.path_params["id"]
    recipe, ingredients = await load_recipe_detail(id, repository=_repo(request))
    notification = None
    if request.query_params.get("notice") == CREATED_NOTICE and recipe.is_loaded:
        notification = Notification.success("Recipe created successfully")
    page = RecipeDetail(
        recipe,
        ingredients,
        environment=_templates(request),
        placeholder_image=_config(request).placeholder_image,
        path=request.url.path,
        notification=notification,
    )
    return page.render(), page.status_code


def _form_page(
    request: Request,
    draft: RecipeDraft,
    *,
    notification: Notification | None = None,
    status_code: int = 200,
) -> HTMLResponse:
    page = RecipeForm(
        draft,
        environment=_templates(request),
        path=request.url.path,
        notification=notification,
        status_code=status_code,
    )
    return HTMLResponse(page.render(), status_code=page.status_code)


def _apply_row_action(draft: RecipeDraft, action: str) -> bool:
    """Handle add/remove ingredient buttons. False if `action` is a submit."""
    if action == "add-ingredient":
        draft.ingredients.add()
        return True
    if action.startswith("remove-ingredient-"):
        try:
            draft.ingredients.remove(int(action.removeprefix("remove-ingredient-")))
        except (ValueError, IndexError):
            logger.warning("Ignoring bad ingredient action %r", action)
        return True
    return False


async def create(request: Request) -> HTMLResponse | RedirectResponse:
    match request.method.lower():
        case "get":
            return _form_page(request, RecipeDraft())
        case "post":
            async with request.form() as form:
                draft = RecipeDraft.from_form(form)
                action = str(form.get("action") or "create")

            if _apply_row_action(draft, action):
                return _form_page(request, draft)

            try:
                recipe = await create_recipe(draft, repository=_repo(request))
            except InvalidDraft as e:
                logger.info("Rejected recipe draft: %s", e)
                return _form_page(
                    request,
                    draft,
                    notification=Notification.error("Failed to create recipe"),
                    status_code=400,
                )
            except RecipeCreateFailed:
                return _form_page(
                    request,
                    draft,
                    notification=Notification.error("Failed to create recipe"),
                    status_code=502,
                )
            except IngredientsCreateFailed:
                return _form_page(
                    request,
                    draft,
                    notification=Notification.error("Failed to add ingredients"),
                    status_code=502,
                )

            return RedirectResponse(
                f"/recipes/{recipe.id}?notice={CREATED_NOTICE}", status_code=303
            )
        case _:
            raise ValueError("Unsupported method.")


def create_app(
    *,
    cfg: config.Config | None = None,
    repository: RecipeRepository | None = None,
    database: Database | None = None,
) -> Starlette:
    """Build the app around an explicit datastore.

    Pass `repository` to bypass the database entirely (tests do). Otherwise
    a `databases.Database` is built from `cfg.db_url`, connected for the
    lifetime of the app, and its tables are created if missing.
    """
    cfg = config.Config() if cfg is None else cfg
    setup_logging(cfg.log_level)

    if repository is None:
        database = db.database_factory(cfg.db_url) if database is None else database
        repository = RecipeRepository(database)

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        if database is None:
            yield
            return
        await database.connect()
        await db.create_db(database)
        logger.info("Connected to %s database", database.url.dialect)
        try:
            yield
        finally:
            await database.disconnect()

    app = Starlette(
        debug=cfg.env == config.Env.local,
        routes=[
            Route("/", homepage, methods=["GET", "POST"]),
            Route("/new", create, methods=["GET", "POST"]),
            Route("/recipes", recipes),
            Route("/recipes/results", recipe_results),
            Route("/recipes/{id}", recipe_detail),
            Route("/favicon.ico", favicon),
            Mount("/assets", StaticFiles(directory=cfg.assets_dir), name="assets"),
        ],
        lifespan=lifespan,
    )

    app.state.config = cfg
    app.state.templates = environment_factory(cfg.html_dir)
    app.state.repo = repository
    return app

