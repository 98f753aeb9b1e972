import pytest

from src.services.customizer.exceptions import EditorSessionNotFoundError
from src.services.editor.registry import EditorSessionRegistry
from src.services.preview.renderer import PreviewStatus
from tests.factories import make_template
from tests.test_template import TestTemplate


class TestEditorSessionRegistry(TestTemplate):
    def test_open_schedules_the_first_render(self):
        registry = EditorSessionRegistry(max_sessions=4, debounce_seconds=0.01)
        workspace = registry.open(make_template())

        assert workspace.preview.pending
        assert workspace.preview.flush()
        assert workspace.preview.state.status == PreviewStatus.READY
        assert registry.get(workspace.session_id) is workspace

    def test_edits_reschedule_the_preview(self):
        registry = EditorSessionRegistry(max_sessions=4, debounce_seconds=0.01)
        workspace = registry.open(make_template())
        workspace.preview.flush()

        workspace.session.update_text("title", "Edited")

        assert workspace.preview.pending
        workspace.preview.flush()
        assert ">Edited<" in workspace.preview.document_markup()

    def test_least_recently_used_session_is_evicted(self):
        registry = EditorSessionRegistry(max_sessions=2, debounce_seconds=0.01)
        first = registry.open(make_template())
        second = registry.open(make_template())
        registry.get(first.session_id)

        registry.open(make_template())

        assert len(registry) == 2
        assert registry.get(first.session_id) is first
        with pytest.raises(EditorSessionNotFoundError):
            registry.get(second.session_id)
        assert not second.preview.pending

    def test_close_clears_and_forgets(self):
        registry = EditorSessionRegistry(max_sessions=2, debounce_seconds=0.01)
        workspace = registry.open(make_template())

        registry.close(workspace.session_id)

        assert workspace.session.template is None
        assert not workspace.preview.pending
        with pytest.raises(EditorSessionNotFoundError):
            registry.close(workspace.session_id)

    def test_missing_surface_surfaces_as_preview_error(self):
        registry = EditorSessionRegistry(
            max_sessions=2, surface_factory=lambda: None, debounce_seconds=0.01
        )
        workspace = registry.open(make_template())
        workspace.preview.flush()

        assert workspace.preview.state.status == PreviewStatus.ERROR
        assert workspace.preview.state.error == "Preview frame not available"
