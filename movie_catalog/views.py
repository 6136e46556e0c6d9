"""
This module renders the HTML views with Jinja2.
render() is a pure function of (template name, data) returning a string;
missing templates and data the template cannot use raise TemplateError.
movie_catalog.views.py
"""
from pathlib import Path
from typing import Any, Mapping, Optional

import jinja2

from movie_catalog.errors import TemplateError

TEMPLATES_DIR = Path(__file__).parent / "templates"

LIST_VIEW = "index.html"
DETAIL_VIEW = "movie.html"
ADD_FORM_VIEW = "add_movie.html"
EDIT_FORM_VIEW = "edit_movie.html"

VIEWS = (LIST_VIEW, DETAIL_VIEW, ADD_FORM_VIEW, EDIT_FORM_VIEW)


def build_environment(directory: Path = TEMPLATES_DIR) -> jinja2.Environment:
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(directory)),
        autoescape=jinja2.select_autoescape(["html"]),
        undefined=jinja2.StrictUndefined,
    )


_env = build_environment()


def render(template_name: str, data: Optional[Mapping[str, Any]] = None,
           env: Optional[jinja2.Environment] = None) -> str:
    env = env or _env
    try:
        template = env.get_template(template_name)
        return template.render(**(data or {}))
    except jinja2.TemplateNotFound as e:
        raise TemplateError(f"template not found: {e.name}") from e
    except (jinja2.TemplateError, TypeError) as e:
        raise TemplateError(str(e)) from e
