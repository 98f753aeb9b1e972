from src.services.customizer.customization_map import (
    GROUP_HEADINGS,
    derive_map,
    find_element,
    group_elements,
    make_label,
    synthesize_map,
)
from src.services.customizer.models import (
    CustomizableElement,
    ElementProperty,
    ElementType,
)
from tests.factories import make_template
from tests.test_template import TestTemplate


class TestCustomizationMap(TestTemplate):
    def test_stored_map_is_returned_unchanged(self):
        stored = [
            CustomizableElement(
                id="button-cta",
                label="Call To Action",
                type=ElementType.BUTTON,
                target="text.cta",
                properties=[ElementProperty.TEXT],
            )
        ]
        template = make_template(customization_map=stored)

        derived = derive_map(template)

        assert derived == stored
        assert len(derived) == 1
        assert derived[0].type == ElementType.BUTTON

    def test_empty_stored_map_is_not_synthesized(self):
        template = make_template(customization_map=[])
        assert derive_map(template) == []

    def test_synthesis_order_and_properties(self):
        template = make_template(
            customizable_fields={
                "text": {"heroTitle": "Hi"},
                "colors": {"pageBackground": "#fff"},
                "images": {"logo": "https://x/logo.png"},
            }
        )

        elements = synthesize_map(template)

        assert [e.id for e in elements] == [
            "text-heroTitle",
            "color-pageBackground",
            "image-logo",
        ]
        assert elements[0].type == ElementType.TEXT
        assert elements[0].target == "text.heroTitle"
        assert elements[0].properties == [
            ElementProperty.TEXT,
            ElementProperty.COLOR,
            ElementProperty.FONT_SIZE,
        ]
        assert elements[1].type == ElementType.CONTAINER
        assert elements[1].properties == [ElementProperty.BACKGROUND_COLOR]
        assert elements[2].type == ElementType.IMAGE
        assert elements[2].properties == [ElementProperty.IMAGE_URL]

    def test_color_paired_with_text_is_not_duplicated(self):
        template = make_template(
            customizable_fields={"text": {"title": "x"}, "colors": {"titleColor": "#fff"}}
        )
        elements = synthesize_map(template)
        assert [e.id for e in elements] == ["text-title"]

    def test_pairing_is_a_substring_match(self):
        # `title` also covers `subtitleColor`; the match is approximate on purpose
        template = make_template(
            customizable_fields={
                "text": {"title": "x"},
                "colors": {"subtitleColor": "#eee", "accent": "#f00"},
            }
        )
        ids = [e.id for e in synthesize_map(template)]
        assert ids == ["text-title", "color-accent"]

    def test_missing_buckets_synthesize_nothing(self):
        template = make_template(customizable_fields=None)
        assert synthesize_map(template) == []

    def test_labels(self):
        assert make_label("heroTitle") == "Hero Title"
        assert make_label("title") == "Title"
        assert make_label("backgroundColorMain") == "Background Color Main"
        # acronyms are split letter by letter
        assert make_label("ctaURL") == "Cta U R L"
        assert make_label("") == ""

    def test_group_elements_orders_groups_and_drops_empty_ones(self):
        template = make_template(
            customizable_fields={
                "text": {"title": "x"},
                "images": {"logo": "https://x/logo.png"},
            }
        )
        groups = group_elements(synthesize_map(template))

        assert [g.type for g in groups] == [ElementType.TEXT, ElementType.IMAGE]
        assert groups[0].heading == GROUP_HEADINGS[ElementType.TEXT] == "Text Elements"
        assert [e.id for e in groups[1].elements] == ["image-logo"]

    def test_find_element(self):
        elements = synthesize_map(make_template())
        assert find_element(elements, "image-hero").target == "images.hero"
        assert find_element(elements, "text-nope") is None
