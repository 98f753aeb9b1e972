import pytest
from pydantic import ValidationError

from src.services.customizer.models import (
    CustomizableElement,
    Customizations,
    Notification,
    NotificationType,
    Template,
)
from tests.test_template import TestTemplate


class TestModels(TestTemplate):
    def test_missing_buckets_load_as_empty(self):
        template = Template(
            id="t",
            name="T",
            customizable_fields={"text": {"a": "b"}, "colors": None},
        )
        assert template.customizable_fields.colors == {}
        assert template.customizable_fields.images == {}
        assert template.customization_map is None

    def test_templates_are_immutable(self):
        template = Template(id="t", name="T")
        with pytest.raises(ValidationError):
            template.name = "Other"

    def test_element_target_must_name_a_bucket(self):
        with pytest.raises(ValidationError):
            CustomizableElement(
                id="x-y", label="X", type="text", target="fonts.y", properties=["text"]
            )
        element = CustomizableElement(
            id="image-logo", label="Logo", type="image", target="images.logo", properties=["imageUrl"]
        )
        assert (element.bucket, element.key) == ("images", "logo")

    def test_duplicate_element_ids_are_rejected(self):
        element = {
            "id": "text-a",
            "label": "A",
            "type": "text",
            "target": "text.a",
            "properties": ["text"],
        }
        with pytest.raises(ValidationError):
            Template(id="t", name="T", customization_map=[element, element])

    def test_customization_bucket_lookup(self):
        customizations = Customizations(colors={"bg": "#fff"})
        assert customizations.bucket("colors") == {"bg": "#fff"}
        with pytest.raises(KeyError):
            customizations.bucket("fonts")

    def test_notification_needs_a_timeout(self):
        with pytest.raises(ValidationError):
            Notification(type=NotificationType.SUCCESS, message="ok", dismiss_after_seconds=0)
