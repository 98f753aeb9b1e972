"""
FAQ accordion behaviour for preview documents.

At most one `.faq-question-container` is open at a time. Opening one expands
its `.faq-description` and shows `x` in its `.toggle-icon`; closing collapses
the description and shows `+`.
"""

from typing import Literal

from bs4 import BeautifulSoup, Tag
from loguru import logger as log

from src.services.customizer.code_generator import FAQ_HOOK_NAME
from src.services.preview.dom import add_class, has_class, remove_class, set_style
from src.services.preview.surface import DocumentSurface, PreviewSurface

CONTAINER_SELECTOR = ".faq-question-container"
ACTIVE_SELECTOR = ".faq-question-container.active"
LISTENER_OWNER = "faq-accordion"

ReattachPath = Literal["hook", "fallback"]


def _set_open(container: Tag, is_open: bool) -> None:
    description = container.select_one(".faq-description")
    icon = container.select_one(".toggle-icon")

    if is_open:
        add_class(container, "active")
    else:
        remove_class(container, "active")

    if description is not None:
        set_style(description, "max-height", "1000px" if is_open else "0")
        set_style(description, "opacity", "1" if is_open else "0")
        set_style(description, "padding", "10px" if is_open else "0 10px")
    if icon is not None:
        icon.string = "x" if is_open else "+"


def toggle(document: BeautifulSoup, container: Tag) -> None:
    for active in document.select(ACTIVE_SELECTOR):
        if active is not container:
            _set_open(active, False)
    _set_open(container, not has_class(container, "active"))


def attach_accordion(surface: PreviewSurface, document: BeautifulSoup, *, replace_existing: bool) -> int:
    containers = surface.query_all(CONTAINER_SELECTOR)
    for container in containers:
        if replace_existing:
            surface.remove_event_listeners(container, "click")
        surface.add_event_listener(
            container,
            "click",
            lambda target: toggle(document, target),
            owner=LISTENER_OWNER,
        )
    return len(containers)


def run_embedded_faq_script(surface: DocumentSurface) -> None:
    """Python rendition of FAQ_SCRIPT: define the initializer on the window, then call it."""
    document = surface.document
    assert document is not None

    def initialize() -> int:
        return attach_accordion(surface, document, replace_existing=False)

    surface.expose_hook(FAQ_HOOK_NAME, initialize)
    initialize()


def attach_host_accordion(surface: PreviewSurface, document: BeautifulSoup) -> int:
    """Host-side accordion; clears any listeners already on the containers first."""
    count = attach_accordion(surface, document, replace_existing=True)
    if count == 0:
        log.debug("No FAQ containers found in preview")
    else:
        log.debug(f"Attached host-side FAQ handling to {count} containers")
    return count


def reattach_faq(surface: PreviewSurface, document: BeautifulSoup) -> ReattachPath:
    """
    Restore FAQ interactivity after a reload.

    Prefer the initializer the document exposes; fall back to the host-side
    accordion when it is missing or fails.
    """
    hook = surface.get_hook(FAQ_HOOK_NAME)
    if callable(hook):
        try:
            hook()
            return "hook"
        except Exception as e:
            log.error(f"Embedded FAQ initializer failed, using host-side handling: {e}")
    else:
        log.debug("No embedded FAQ initializer, using host-side handling")

    attach_host_accordion(surface, document)
    return "fallback"
