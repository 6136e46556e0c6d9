"""
Unit tests for the HTML renderer.
"""

import pytest

from movie_catalog import views
from movie_catalog.errors import TemplateError
from movie_catalog.movie_service import Movie

ID = "5f1d7f0c8f1b2c3d4e5f6a7b"


def make_movie(**overrides) -> Movie:
    data = {"id": ID, "Title": "Inception", "Poster": "p.jpg", "Released": "2010", "Metascore": 74}
    data.update(overrides)
    return Movie(**data)


class TestRender:
    """Tests for render()."""

    def test_list_view(self):
        page = views.render(views.LIST_VIEW, {"movies": [make_movie()]})

        assert "Inception" in page
        assert f'href="/movies/{ID}"' in page
        assert f'href="/movies/edit/{ID}"' in page
        assert f'href="/movies/delete/{ID}"' in page

    def test_list_view_empty(self):
        assert "No movies yet." in views.render(views.LIST_VIEW, {"movies": []})

    def test_detail_view(self):
        page = views.render(views.DETAIL_VIEW, {"movie": make_movie()})
        assert "<h1>Inception</h1>" in page
        assert "74" in page
        assert 'src="p.jpg"' in page

    def test_detail_view_optional_fields(self):
        page = views.render(views.DETAIL_VIEW, {"movie": make_movie(Poster=None, Released=None, Metascore=None)})
        assert "N/A" in page
        assert "<img" not in page

    def test_add_form(self):
        page = views.render(views.ADD_FORM_VIEW)
        assert '<form method="post" action="/">' in page
        for name in ("Title", "Poster", "Released", "Metascore"):
            assert f'name="{name}"' in page

    def test_edit_form_prefilled(self):
        page = views.render(views.EDIT_FORM_VIEW, {"movie": make_movie()})
        assert f'action="/movies/{ID}"' in page
        assert 'value="Inception"' in page
        assert 'value="74"' in page

    def test_output_is_escaped(self):
        page = views.render(views.DETAIL_VIEW, {"movie": make_movie(Title="<script>x</script>")})
        assert "<script>x</script>" not in page
        assert "&lt;script&gt;" in page

    def test_is_pure(self):
        data = {"movies": [make_movie()]}
        assert views.render(views.LIST_VIEW, data) == views.render(views.LIST_VIEW, data)

    def test_every_view_exists(self):
        env = views.build_environment()
        for name in views.VIEWS:
            env.get_template(name)


class TestRenderErrors:
    """Failures raise TemplateError."""

    def test_missing_template(self):
        with pytest.raises(TemplateError, match="missing.html"):
            views.render("missing.html", {})

    def test_missing_data(self):
        with pytest.raises(TemplateError):
            views.render(views.DETAIL_VIEW, {})

    def test_incompatible_data(self):
        with pytest.raises(TemplateError):
            views.render(views.LIST_VIEW, {"movies": 42})
