"""
Derivation of the editable element list for a template.

A template may store an explicit customization map; when it does not, one is
synthesized from its customizable field buckets.
"""

import re
from typing import Dict, List

from loguru import logger as log
from pydantic import BaseModel

from src.services.customizer.models import (
    CustomizableElement,
    ElementProperty,
    ElementType,
    Template,
)

TEXT_PROPERTIES = [ElementProperty.TEXT, ElementProperty.COLOR, ElementProperty.FONT_SIZE]
COLOR_PROPERTIES = [ElementProperty.BACKGROUND_COLOR]
IMAGE_PROPERTIES = [ElementProperty.IMAGE_URL]

TYPE_ORDER = [ElementType.TEXT, ElementType.CONTAINER, ElementType.IMAGE, ElementType.BUTTON]

GROUP_HEADINGS = {
    ElementType.TEXT: "Text Elements",
    ElementType.CONTAINER: "Container Elements",
    ElementType.IMAGE: "Image Elements",
    ElementType.BUTTON: "Button Elements",
}

_UPPERCASE = re.compile(r"([A-Z])")


def make_label(key: str) -> str:
    """
    Turn a camelCase key into a display label: `heroTitle` -> `Hero Title`.

    Acronyms and leading digits are not special-cased (`ctaURL` -> `Cta U R L`).
    """
    return key[:1].upper() + _UPPERCASE.sub(r" \1", key[1:])


def _key_suffix(element: CustomizableElement) -> str:
    return element.id.split("-")[1]


def _covered_by_text_color(key: str, elements: List[CustomizableElement]) -> bool:
    # Substring heuristic: `title` also covers `subtitleColor`.
    return any(
        ElementProperty.COLOR in element.properties and _key_suffix(element) in key
        for element in elements
    )


def synthesize_map(template: Template) -> List[CustomizableElement]:
    fields = template.customizable_fields
    elements: List[CustomizableElement] = []

    for key in fields.text:
        elements.append(
            CustomizableElement(
                id=f"text-{key}",
                label=make_label(key),
                type=ElementType.TEXT,
                target=f"text.{key}",
                properties=list(TEXT_PROPERTIES),
            )
        )

    for key in fields.colors:
        if _covered_by_text_color(key, elements):
            log.debug(f"Color {key} is editable through a text element, skipping")
            continue
        elements.append(
            CustomizableElement(
                id=f"color-{key}",
                label=make_label(key),
                type=ElementType.CONTAINER,
                target=f"colors.{key}",
                properties=list(COLOR_PROPERTIES),
            )
        )

    for key in fields.images:
        elements.append(
            CustomizableElement(
                id=f"image-{key}",
                label=make_label(key),
                type=ElementType.IMAGE,
                target=f"images.{key}",
                properties=list(IMAGE_PROPERTIES),
            )
        )

    return elements


def derive_map(template: Template) -> List[CustomizableElement]:
    """Return the stored customization map if present, otherwise synthesize one."""
    if template.customization_map is not None:
        return template.customization_map
    return synthesize_map(template)


class ElementGroup(BaseModel):
    type: ElementType
    heading: str
    elements: List[CustomizableElement]


def group_elements(elements: List[CustomizableElement]) -> List[ElementGroup]:
    """Group elements by type in display order, dropping empty groups."""
    by_type: Dict[ElementType, List[CustomizableElement]] = {}
    for element in elements:
        by_type.setdefault(element.type, []).append(element)

    return [
        ElementGroup(type=element_type, heading=GROUP_HEADINGS[element_type], elements=by_type[element_type])
        for element_type in TYPE_ORDER
        if by_type.get(element_type)
    ]


def find_element(elements: List[CustomizableElement], element_id: str) -> CustomizableElement | None:
    for element in elements:
        if element.id == element_id:
            return element
    return None
