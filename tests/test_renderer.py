"""Tests for writing the documentation tree."""

from pathlib import Path
from typing import Any

import pytest

from staticdoc.config import StaticdocConfig, TemplateConfig
from staticdoc.exceptions import OutputError, TemplateRenderError, UnsupportedKindError
from staticdoc.models import Document
from staticdoc.renderer import DOC_ROOT_NAME, JinjaTemplateEngine, plan_tree, render_tree
from tests.conftest import make_entity


class RecordingEngine:
    """Template engine that records every call and renders the entity id."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def render(self, template_name: str, context: dict[str, Any]) -> str:
        self.calls.append((template_name, context))
        return f"<page>{context['id']}</page>"


class FailingEngine:
    """Template engine that fails on a given entity."""

    def __init__(self, fail_on: str) -> None:
        self.fail_on = fail_on

    def render(self, template_name: str, context: dict[str, Any]) -> str:
        if context["id"] == self.fail_on:
            raise TemplateRenderError(f"boom on {self.fail_on}")
        return "ok"


class TestRenderTree:
    """Test render_tree."""

    def test_layout(self, tmp_path: Path, crate_document: Document) -> None:
        """Every entity gets a file under the doc2 namespace."""
        report = render_tree(crate_document, tmp_path, RecordingEngine())

        root = tmp_path / DOC_ROOT_NAME
        assert report.root == root
        assert (root / "test_crate/index.html").read_text() == "<page>test_crate</page>"
        assert (root / "test_crate/test_module/index.html").exists()
        assert (root / "test_crate/test_module/struct.TestStruct.html").exists()
        assert (root / "test_crate/struct.TestStruct.html").exists()
        assert len(report.written) == 4

    def test_render_order(self, tmp_path: Path, crate_document: Document) -> None:
        """The primary entity renders first, then included entities in order."""
        engine = RecordingEngine()
        report = render_tree(crate_document, tmp_path, engine)

        ids = [context["id"] for _, context in engine.calls]
        assert ids == [entity.id for entity in crate_document.entities()]
        assert {name for name, _ in engine.calls} == {"item"}
        assert report.written[0] == tmp_path / DOC_ROOT_NAME / "test_crate/index.html"

    def test_output_root_created(self, tmp_path: Path, crate_document: Document) -> None:
        """A missing output root is created along with its ancestors."""
        output = tmp_path / "does" / "not" / "exist"
        render_tree(crate_document, output, RecordingEngine())
        assert (output / DOC_ROOT_NAME / "test_crate/index.html").exists()

    def test_overwrites_existing(self, tmp_path: Path, crate_document: Document) -> None:
        """Re-rendering replaces existing pages."""
        page = tmp_path / DOC_ROOT_NAME / "test_crate/index.html"
        page.parent.mkdir(parents=True)
        page.write_text("stale")

        render_tree(crate_document, tmp_path, RecordingEngine())

        assert page.read_text() == "<page>test_crate</page>"

    def test_rerun_is_reproducible(self, tmp_path: Path, crate_document: Document) -> None:
        """Two runs over the same input write identical trees."""
        first = render_tree(crate_document, tmp_path / "a", JinjaTemplateEngine())
        second = render_tree(crate_document, tmp_path / "b", JinjaTemplateEngine())

        for a, b in zip(first.written, second.written, strict=True):
            assert a.relative_to(first.root) == b.relative_to(second.root)
            assert a.read_text() == b.read_text()

    def test_dangling_reference_does_not_abort(self, tmp_path: Path) -> None:
        """Dangling targets are reported while every page is still written."""
        module = make_entity("module", "k::m", relationships={"items": ["k::m::Gone", "k::m::S"]})
        document = Document(
            primary=make_entity("crate", "k", relationships={"modules": ["k::m"]}),
            included=[module, make_entity("struct", "k::m::S")],
        )

        report = render_tree(document, tmp_path, RecordingEngine())

        assert len(report.written) == 3
        assert [d.target_id for d in report.diagnostics] == ["k::m::Gone"]

    def test_unsupported_kind_aborts(self, tmp_path: Path) -> None:
        """An entity without a path strategy fails the run."""
        document = Document(
            primary=make_entity("crate", "k"),
            included=[make_entity("trait", "k::T"), make_entity("struct", "k::S")],
        )

        with pytest.raises(UnsupportedKindError):
            render_tree(document, tmp_path, RecordingEngine())

        # Pages before the failure stay, later ones are never written
        assert (tmp_path / DOC_ROOT_NAME / "k/index.html").exists()
        assert not (tmp_path / DOC_ROOT_NAME / "k/struct.S.html").exists()

    def test_template_failure_aborts(self, tmp_path: Path, crate_document: Document) -> None:
        """A template failure stops the run without removing earlier pages."""
        with pytest.raises(TemplateRenderError):
            render_tree(crate_document, tmp_path, FailingEngine("test_crate::test_module"))

        root = tmp_path / DOC_ROOT_NAME
        assert (root / "test_crate/index.html").exists()
        assert not (root / "test_crate/test_module/index.html").exists()

    def test_unwritable_root(self, tmp_path: Path, crate_document: Document) -> None:
        """A root that cannot be created is an output error."""
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")

        with pytest.raises(OutputError):
            render_tree(crate_document, blocker, RecordingEngine())

    def test_unwritable_page(self, tmp_path: Path, crate_document: Document) -> None:
        """A page path occupied by a directory is an output error."""
        (tmp_path / DOC_ROOT_NAME / "test_crate/struct.TestStruct.html").mkdir(parents=True)

        with pytest.raises(OutputError, match="struct.TestStruct.html"):
            render_tree(crate_document, tmp_path, RecordingEngine())


class TestJinjaTemplateEngine:
    """Test the bundled jinja2 template engine."""

    def test_bundled_item_template(self, tmp_path: Path, crate_document: Document) -> None:
        """The default template renders docs and section links."""
        report = render_tree(crate_document, tmp_path)

        html = (report.root / "test_crate/test_module/index.html").read_text()
        assert "<title>test_module - module</title>" in html
        assert "<p>A module.</p>" in html
        assert '<a href="struct.TestStruct.html">TestStruct</a>' in html
        assert "<p>A nested struct.</p>" in html

    def test_page_without_docs_or_sections(self, tmp_path: Path, crate_document: Document) -> None:
        """Optional context keys may be missing under strict undefined."""
        report = render_tree(crate_document, tmp_path)

        html = (report.root / "test_crate/struct.TestStruct.html").read_text()
        assert "TestStruct" in html
        assert 'class="docs"' not in html

    def test_names_are_escaped(self) -> None:
        """Plain context values are HTML-escaped."""
        html = JinjaTemplateEngine().render("item", {"kind": "struct", "name": "<A>", "id": "k::<A>"})
        assert "&lt;A&gt;" in html

    def test_custom_template_dir(self, tmp_path: Path, crate_document: Document) -> None:
        """A configured template directory replaces the bundled template."""
        templates = tmp_path / "templates"
        templates.mkdir()
        (templates / "item.html").write_text("{{ kind }}:{{ name }}")
        config = StaticdocConfig(templates=TemplateConfig(directory=templates))

        report = render_tree(crate_document, tmp_path / "out", config=config)

        assert (report.root / "test_crate/index.html").read_text() == "crate:test_crate"

    def test_missing_template(self, tmp_path: Path) -> None:
        """A template directory without item.html fails to render."""
        engine = JinjaTemplateEngine(tmp_path)
        with pytest.raises(TemplateRenderError, match="item"):
            engine.render("item", {"kind": "crate", "name": "k", "id": "k"})

    def test_undefined_variable(self, tmp_path: Path) -> None:
        """Templates referencing unknown context keys fail loudly."""
        (tmp_path / "item.html").write_text("{{ nonexistent }}")
        with pytest.raises(TemplateRenderError):
            JinjaTemplateEngine(tmp_path).render("item", {"kind": "crate", "name": "k", "id": "k"})


class TestPlanTree:
    """Test plan_tree."""

    def test_plan_matches_render_order(self, crate_document: Document) -> None:
        """Planned paths follow the render order without touching the disk."""
        planned = plan_tree(crate_document)
        assert [str(path) for _, path in planned] == [
            "test_crate/index.html",
            "test_crate/test_module/index.html",
            "test_crate/test_module/struct.TestStruct.html",
            "test_crate/struct.TestStruct.html",
        ]
