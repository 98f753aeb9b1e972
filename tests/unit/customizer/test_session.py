import pytest

from src.services.customizer.code_generator import assemble
from src.services.customizer.exceptions import InvalidTargetError, NoTemplateSelectedError
from src.services.customizer.models import Customizations
from src.services.customizer.session import EditorSession
from tests.factories import make_template
from tests.test_template import TestTemplate


class TestEditorSession(TestTemplate):
    def test_selecting_a_template_seeds_customizations(self):
        template = make_template()
        session = EditorSession("s1", template)

        assert session.customizations == Customizations.from_fields(
            template.customizable_fields
        )
        assert [e.id for e in session.customization_map] == [
            "text-title",
            "color-bg",
            "image-hero",
        ]

    def test_reset_restores_defaults_after_edits(self):
        template = make_template()
        session = EditorSession("s1", template)

        session.update_text("title", "Changed")
        session.update_color("bg", "#123456")
        session.update_image("hero", "https://x/other.png")
        session.update_text("brandNew", "added")
        session.reset()

        assert session.customizations.model_dump() == template.customizable_fields.model_dump()

    def test_edits_do_not_touch_template_defaults(self):
        template = make_template()
        session = EditorSession("s1", template)

        session.update_text("title", "Changed")

        assert template.customizable_fields.text["title"] == "Hello"

    def test_customizations_are_a_snapshot(self):
        session = EditorSession("s1", make_template())
        snapshot = session.customizations
        snapshot.text["title"] = "mutated"
        assert session.customizations.text["title"] == "Hello"

    def test_unknown_bucket_is_rejected(self):
        session = EditorSession("s1", make_template())
        with pytest.raises(InvalidTargetError):
            session.update("fonts", "title", "Arial")

    def test_final_code_tracks_edits(self):
        template = make_template()
        session = EditorSession("s1", template)

        first = session.final_code()
        assert first == session.final_code()

        session.update_text("title", "Bye")
        second = session.final_code()
        assert second != first
        assert second == assemble(template, session.customizations)
        assert "<h1 class=\"title\">Bye</h1>" in second

    def test_final_code_is_empty_without_template(self):
        session = EditorSession("s1")
        assert session.final_code() == ""

    def test_subscribers_see_every_change_until_unsubscribed(self):
        session = EditorSession("s1", make_template())
        seen = []
        unsubscribe = session.subscribe(lambda s: seen.append(s.customizations.text.get("title")))

        session.update_text("title", "One")
        session.reset()
        unsubscribe()
        session.update_text("title", "Two")

        assert seen == ["One", "Hello"]

    def test_clear_drops_template_and_values(self):
        session = EditorSession("s1", make_template())
        session.clear()

        assert session.template is None
        assert session.customization_map == []
        assert session.customizations == Customizations()

    def test_edits_after_clear_are_rejected(self):
        session = EditorSession("s1", make_template())
        session.clear()
        revision = session.revision

        with pytest.raises(NoTemplateSelectedError):
            session.update_text("title", "Late")
        with pytest.raises(NoTemplateSelectedError):
            session.update("colors", "titleColor", "#000")
        assert session.customizations == Customizations()
        assert session.revision == revision

    def test_switching_templates_replaces_working_values(self):
        session = EditorSession("s1", make_template())
        session.update_text("title", "Edited")

        other = make_template(
            id="other", customizable_fields={"text": {"headline": "New"}}
        )
        session.select_template(other)

        assert session.customizations.text == {"headline": "New"}
