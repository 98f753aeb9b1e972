"""Property reads and writes for a selected customizable element."""

from src.services.customizer.models import (
    CustomizableElement,
    Customizations,
    ElementProperty,
)
from src.services.customizer.session import EditorSession

TEXT_COLOR_SWATCHES = ["#ffffff", "#f87171", "#fbbf24", "#34d399", "#60a5fa", "#818cf8", "#c084fc"]
BACKGROUND_SWATCHES = ["#333333", "#1f2937", "#111827", "#0f172a", "#312e81", "#4c1d95", "#831843"]
FONT_SIZES = [f"{size}px" for size in (12, 14, 16, 18, 20, 24, 28, 32, 36, 48)]

_COLOR_PROPERTIES = (ElementProperty.COLOR, ElementProperty.BACKGROUND_COLOR)


def get_property_value(
    element: CustomizableElement,
    prop: ElementProperty,
    customizations: Customizations,
) -> str:
    """Current value of one property of `element`, or "" when it has none."""
    bucket, key = element.bucket, element.key

    if bucket == "text" and prop == ElementProperty.TEXT:
        return customizations.text.get(key, "")
    if bucket == "colors" and prop in _COLOR_PROPERTIES:
        return customizations.colors.get(key, "")
    if bucket == "images" and prop == ElementProperty.IMAGE_URL:
        return customizations.images.get(key, "")
    return ""


def apply_property_update(
    session: EditorSession,
    element: CustomizableElement,
    prop: ElementProperty,
    value: str,
) -> bool:
    """
    Route a property edit to the right customization key.

    A text element's color is stored under the `<key>Color` color key. Returns
    False when the property has nowhere to go (e.g. font size).
    """
    bucket, key = element.bucket, element.key

    if bucket == "text":
        if prop == ElementProperty.TEXT:
            session.update_text(key, value)
            return True
        if prop == ElementProperty.COLOR:
            session.update_color(f"{key}Color", value)
            return True
        return False

    if bucket == "colors":
        session.update_color(key, value)
        return True

    if bucket == "images" and prop == ElementProperty.IMAGE_URL:
        session.update_image(key, value)
        return True

    return False


def element_snapshot(element: CustomizableElement, customizations: Customizations) -> dict:
    """Values of every editable property of `element`, keyed by property name."""
    return {
        prop.value: get_property_value(element, prop, customizations)
        for prop in element.properties
    }
