"""
This module is the main entry point for the FastAPI application.
create_app() wires a MovieStore into the routes, registers the error
handlers and serves the static assets. The routes list, show, create,
edit and delete movies, rendering HTML views or redirecting back to the
list; failures come back as JSON {"msg": ...} with a 404 or 500 status.
movie_catalog.main.py
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from movie_catalog import views
from movie_catalog.config import Settings, load_settings
from movie_catalog.db import connect, get_movie_collection
from movie_catalog.errors import NotFound, StoreError, TemplateError
from movie_catalog.movie_service import MovieFields, MovieStore, lookup_filter

logger = logging.getLogger(__name__)

PUBLIC_DIR = Path(__file__).parent / "public"

router = APIRouter()


def error_response(status_code: int, msg: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"msg": msg})


def describe(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'body'}: {err['msg']}"
        for err in error.errors()
    )


def get_store(request: Request) -> MovieStore:
    return request.app.state.store


async def movie_payload(request: Request) -> Dict[str, Any]:
    """Decode a JSON or form-encoded body into a plain field mapping."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            raise StarletteHTTPException(status_code=400, detail="Malformed JSON body")
        if not isinstance(body, dict):
            raise StarletteHTTPException(status_code=400, detail="JSON body must be an object")
        return body
    form = await request.form()
    return {key: form.get(key) for key in form.keys()}


def html(template_name: str, data: Optional[Dict[str, Any]] = None) -> HTMLResponse:
    return HTMLResponse(views.render(template_name, data))


def redirect_home() -> RedirectResponse:
    return RedirectResponse("/", status_code=302)


@router.get("/")
def list_movies(request: Request, store: MovieStore = Depends(get_store)):
    try:
        movies = store.find_all()
    except StoreError as e:
        logger.error("Error fetching movies (%s): %s", request.url.path, e)
        return error_response(500, f"Error fetching movies: {e}")
    return html(views.LIST_VIEW, {"movies": movies})


@router.get("/add")
def add_form():
    return html(views.ADD_FORM_VIEW)


@router.post("/")
def create_movie(request: Request, payload: Dict[str, Any] = Depends(movie_payload),
                 store: MovieStore = Depends(get_store)):
    try:
        store.insert(MovieFields.model_validate(payload))
    except ValidationError as e:
        return error_response(500, f"Error adding movie: {describe(e)}")
    except StoreError as e:
        logger.error("Error adding movie (%s): %s", request.url.path, e)
        return error_response(500, f"Error adding movie: {e}")
    return redirect_home()


@router.get("/movies/edit/{movie_id}")
def edit_form(request: Request, movie_id: str, store: MovieStore = Depends(get_store)):
    try:
        movie = store.find_by_id(movie_id)
    except StoreError as e:
        logger.error("Error fetching movie for editing (%s): %s", request.url.path, e)
        return error_response(500, f"Error fetching movie for editing: {e}")
    if not movie:
        raise NotFound()
    return html(views.EDIT_FORM_VIEW, {"movie": movie})


@router.get("/movies/delete/{movie_id}")
def delete_movie(request: Request, movie_id: str, store: MovieStore = Depends(get_store)):
    try:
        store.delete_by_id(movie_id)
    except StoreError as e:
        logger.error("Error deleting movie (%s): %s", request.url.path, e)
        return error_response(500, f"Error deleting movie: {e}")
    return redirect_home()


# path convertor so titles containing "/" still reach this route
@router.get("/movies/{id_or_title:path}")
def get_movie(request: Request, id_or_title: str, store: MovieStore = Depends(get_store)):
    try:
        movie = store.find_one(lookup_filter(id_or_title))
    except StoreError as e:
        logger.error("Error retrieving movie (%s): %s", request.url.path, e)
        return error_response(500, f"Error retrieving movie: {e}")
    if not movie:
        raise NotFound()
    return html(views.DETAIL_VIEW, {"movie": movie})


@router.post("/movies/{movie_id}")
def update_movie(request: Request, movie_id: str, payload: Dict[str, Any] = Depends(movie_payload),
                 store: MovieStore = Depends(get_store)):
    try:
        movie = store.update_by_id(movie_id, MovieFields.model_validate(payload))
    except ValidationError as e:
        return error_response(500, f"Error updating movie: {describe(e)}")
    except StoreError as e:
        logger.error("Error updating movie (%s): %s", request.url.path, e)
        return error_response(500, f"Error updating movie: {e}")
    if not movie:
        raise NotFound()
    return redirect_home()


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(NotFound)
    async def not_found(request: Request, exc: NotFound):
        return error_response(404, exc.msg)

    @app.exception_handler(TemplateError)
    async def template_error(request: Request, exc: TemplateError):
        logger.error("Error rendering view (%s): %s", request.url.path, exc)
        return error_response(500, f"Error rendering view: {exc}")

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"msg": exc.detail},
                            headers=getattr(exc, "headers", None))


def create_app(store: Optional[MovieStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    client = None
    if store is None:
        settings = settings or load_settings()
        client = connect(settings)
        store = MovieStore(get_movie_collection(client, settings))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if client is not None:
            client.close()

    app = FastAPI(title="movie-catalog", lifespan=lifespan)
    app.state.store = store
    app.state.settings = settings
    app.include_router(router)
    register_error_handlers(app)
    # mounted last so the routes above take precedence
    app.mount("/", StaticFiles(directory=str(PUBLIC_DIR)), name="public")
    return app


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run() -> None:
    import uvicorn

    settings = load_settings()
    configure_logging(settings.log_level)
    app = create_app(settings=settings)
    logger.info("Server is running on port %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
