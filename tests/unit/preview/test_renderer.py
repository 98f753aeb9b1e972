import asyncio

import pytest

from src.services.customizer.code_generator import assemble
from src.services.customizer.exceptions import RenderSurfaceUnavailableError
from src.services.customizer.models import Customizations
from src.services.preview.document import CONTENT_WRAPPER_CLASS
from src.services.preview.dom import get_style
from src.services.preview.embedded_scripts import create_document_surface
from src.services.preview.renderer import (
    PreviewRenderer,
    PreviewStatus,
    compute_fit_scale,
)
from src.services.preview.surface import DocumentSurface, Size
from tests.factories import make_faq_template, make_template
from tests.test_template import TestTemplate


class DeferredLoadSurface(DocumentSurface):
    """Surface whose load signals are delivered by the test."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.deferred = []

    def add_load_listener(self, listener):
        self.deferred.append(listener)
        return lambda: None


class BrokenWriteSurface(DocumentSurface):
    def __init__(self, error: Exception):
        super().__init__()
        self.error = error

    def write(self, markup: str) -> None:
        raise self.error


class UnscalableSurface(DocumentSurface):
    def measure(self) -> Size:
        return Size(5000, 5000)

    def set_wrapper_scale(self, scale: float) -> None:
        raise RenderSurfaceUnavailableError("window is gone")


def code_for(title: str) -> str:
    template = make_template()
    return assemble(template, Customizations(text={"title": title}))


class TestFitScale(TestTemplate):
    def test_fitting_content_is_left_alone(self):
        assert compute_fit_scale(Size(800, 600), Size(1024, 768), 0.9) is None

    def test_overflow_uses_the_tighter_ratio(self):
        scale = compute_fit_scale(Size(2048, 100), Size(1024, 768), 0.9)
        assert scale == pytest.approx(0.45)

        scale = compute_fit_scale(Size(100, 1536), Size(1024, 768), 0.9)
        assert scale == pytest.approx(0.45)


class TestPreviewRenderer(TestTemplate):
    def test_render_reaches_ready_with_hook_path(self):
        surface = create_document_surface()
        renderer = PreviewRenderer(surface, debounce_seconds=0.01, fit_margin=0.9)

        generation = renderer.render(assemble(make_faq_template(), Customizations()))

        assert generation == 1
        assert renderer.state.status == PreviewStatus.READY
        assert renderer.state.faq_path == "hook"
        assert renderer.state.scale == 0.9
        assert renderer.state.error is None

    def test_each_render_replaces_the_document(self):
        surface = create_document_surface()
        renderer = PreviewRenderer(surface, debounce_seconds=0.01)

        renderer.render(code_for("First"))
        renderer.render(code_for("Second"))

        markup = renderer.document_markup()
        assert "Second" in markup
        assert "First" not in markup
        assert len(surface.query_all(f".{CONTENT_WRAPPER_CLASS}")) == 1

    def test_missing_surface_is_an_error_state(self):
        renderer = PreviewRenderer(None, debounce_seconds=0.01)

        renderer.render(code_for("x"))

        assert renderer.state.status == PreviewStatus.ERROR
        assert renderer.state.error == "Preview frame not available"
        assert renderer.document_markup() is None

    def test_inaccessible_document_is_an_error_state(self):
        surface = BrokenWriteSurface(RenderSurfaceUnavailableError("cross-origin"))
        renderer = PreviewRenderer(surface, debounce_seconds=0.01)

        renderer.render(code_for("x"))

        assert renderer.state.status == PreviewStatus.ERROR
        assert renderer.state.error == "Cannot access preview document"

    def test_unexpected_write_failure_is_an_error_state(self):
        renderer = PreviewRenderer(BrokenWriteSurface(ValueError("bad")), debounce_seconds=0.01)

        renderer.render(code_for("x"))

        assert renderer.state.status == PreviewStatus.ERROR
        assert renderer.state.error == "Failed to update preview"

    def test_load_handler_failure_is_reported(self):
        renderer = PreviewRenderer(UnscalableSurface(), debounce_seconds=0.01)

        renderer.render(code_for("x"))

        assert renderer.state.status == PreviewStatus.ERROR
        assert renderer.state.error == "Error loading preview: window is gone"

    def test_overflowing_content_is_scaled_down(self):
        surface = create_document_surface(viewport=Size(1024, 768))
        renderer = PreviewRenderer(surface, debounce_seconds=0.01, fit_margin=0.9)
        template = make_template(html_structure='<div style="width: 2048px; height: 100px">wide</div>')

        renderer.render(assemble(template, Customizations()))

        assert renderer.state.scale == pytest.approx(0.45)
        wrapper = surface.query(f".{CONTENT_WRAPPER_CLASS}")
        assert get_style(wrapper, "transform") == f"scale({renderer.state.scale})"

    def test_superseded_load_is_ignored(self):
        surface = DeferredLoadSurface()
        renderer = PreviewRenderer(surface, debounce_seconds=0.01)

        renderer.render(code_for("old"))
        renderer.render(code_for("new"))
        old_load, new_load = surface.deferred

        old_load()
        assert renderer.state.status == PreviewStatus.LOADING
        assert renderer.state.generation == 2

        new_load()
        assert renderer.state.status == PreviewStatus.READY
        assert renderer.state.generation == 2

        old_load()
        assert renderer.state.generation == 2

    def test_hooks_run_around_the_render(self):
        renderer = PreviewRenderer(create_document_surface(), debounce_seconds=0.01)
        written, loaded = [], []
        renderer.before_render.append(written.append)
        renderer.after_load.append(loaded.append)

        renderer.render(code_for("Hooked"))

        assert len(written) == 1 and "Hooked" in written[0]
        assert [state.status for state in loaded] == [PreviewStatus.READY]

    def test_schedule_then_flush(self):
        renderer = PreviewRenderer(create_document_surface(), debounce_seconds=0.01)

        renderer.schedule(code_for("one"))
        renderer.schedule(code_for("two"))
        assert renderer.pending
        assert renderer.generation == 0

        assert renderer.flush()
        assert renderer.generation == 1
        assert "two" in renderer.document_markup()

    @pytest.mark.asyncio
    async def test_debounced_edits_render_once(self):
        renderer = PreviewRenderer(create_document_surface(), debounce_seconds=0.01)

        for title in ("a", "ab", "abc"):
            renderer.schedule(code_for(title))
        await asyncio.sleep(0.05)

        assert renderer.generation == 1
        assert renderer.state.status == PreviewStatus.READY
        assert ">abc<" in renderer.document_markup()
