"""Python handlers standing in for the inline scripts the preview document carries."""

from typing import Dict

from src.services.customizer.code_generator import (
    FAQ_SCRIPT,
    PADDING_CHECK_SCRIPT,
    PADDING_SENTINEL,
)
from src.services.preview.document import FIT_SCRIPT, LOADING_CLASS
from src.services.preview.dom import remove_class, set_style
from src.services.preview.faq import run_embedded_faq_script
from src.services.preview.surface import DocumentSurface, ScriptHandler, Size, script_body


def run_padding_check(surface: DocumentSurface) -> None:
    for element in surface.query_all(".form-element__content"):
        if PADDING_SENTINEL in element.get_text():
            set_style(element, "padding", "0 !important")


def run_fit_script(surface: DocumentSurface) -> None:
    body = surface.query("body")
    if body is not None:
        remove_class(body, LOADING_CLASS)


EMBEDDED_SCRIPT_HANDLERS: Dict[str, ScriptHandler] = {
    script_body(FAQ_SCRIPT).strip(): run_embedded_faq_script,
    script_body(PADDING_CHECK_SCRIPT).strip(): run_padding_check,
    FIT_SCRIPT.strip(): run_fit_script,
}


def create_document_surface(viewport: Size = Size(1024, 768)) -> DocumentSurface:
    """Headless surface that understands the scripts assembled code ships with."""
    return DocumentSurface(viewport=viewport, script_handlers=EMBEDDED_SCRIPT_HANDLERS)
