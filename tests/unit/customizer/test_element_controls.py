from src.services.customizer.customization_map import find_element
from src.services.customizer.element_controls import (
    apply_property_update,
    element_snapshot,
    get_property_value,
)
from src.services.customizer.models import ElementProperty
from src.services.customizer.session import EditorSession
from tests.factories import make_template
from tests.test_template import TestTemplate


class TestElementControls(TestTemplate):
    def _session(self) -> EditorSession:
        return EditorSession("controls", make_template())

    def test_text_element_edits_text_and_paired_color(self):
        session = self._session()
        title = find_element(session.customization_map, "text-title")

        assert apply_property_update(session, title, ElementProperty.TEXT, "New title")
        assert apply_property_update(session, title, ElementProperty.COLOR, "#ff0000")

        assert session.customizations.text["title"] == "New title"
        assert session.customizations.colors["titleColor"] == "#ff0000"

    def test_font_size_has_no_destination(self):
        session = self._session()
        title = find_element(session.customization_map, "text-title")
        revision = session.revision

        assert not apply_property_update(session, title, ElementProperty.FONT_SIZE, "24px")
        assert session.revision == revision

    def test_container_and_image_updates(self):
        session = self._session()
        bg = find_element(session.customization_map, "color-bg")
        hero = find_element(session.customization_map, "image-hero")

        assert apply_property_update(session, bg, ElementProperty.BACKGROUND_COLOR, "#222222")
        assert apply_property_update(session, hero, ElementProperty.IMAGE_URL, "https://x/new.png")

        assert session.customizations.colors["bg"] == "#222222"
        assert session.customizations.images["hero"] == "https://x/new.png"

    def test_reads_follow_the_element_bucket(self):
        session = self._session()
        customizations = session.customizations
        title = find_element(session.customization_map, "text-title")
        hero = find_element(session.customization_map, "image-hero")

        assert get_property_value(title, ElementProperty.TEXT, customizations) == "Hello"
        assert get_property_value(title, ElementProperty.FONT_SIZE, customizations) == ""
        assert element_snapshot(hero, customizations) == {
            "imageUrl": "https://cdn.example.com/hero.png"
        }
