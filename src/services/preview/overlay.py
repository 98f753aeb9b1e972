"""
Interactive inline editing overlay.

The alternate preview mode renders template markup directly and makes it
editable in place: text placeholders become tagged spans, elements styled by a
`{{color.K}}` rule are tagged as color-bearing, and images are resolved back to
their image key from their URL. `InlineEditController` turns clicks and
commits into customization updates on the editor session.
"""

import re
from typing import Dict, List, Literal, Optional

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import Comment, Script, Stylesheet
from loguru import logger as log
from pydantic import BaseModel
from soupsieve import SelectorSyntaxError

from common import global_config
from src.services.customizer.code_generator import placeholder, render_css
from src.services.customizer.exceptions import NoTemplateSelectedError
from src.services.customizer.models import Customizations, Template
from src.services.customizer.session import EditorSession

OVERLAY_STYLE_ID = "interactive-edit-styles"
TEXT_CLASS = "interactive-text"

OVERLAY_STYLE = """
  .interactive-text {
    cursor: text;
    border-bottom: 1px dashed transparent;
    transition: border-color 0.2s;
  }
  .interactive-text:hover {
    border-bottom-color: #3B82F6;
  }
  .inline-editor {
    border: 1px solid #3B82F6;
    padding: 2px 4px;
    font-family: inherit;
    font-size: inherit;
    color: inherit;
    background: white;
  }
  [data-edit-type="color"] {
    cursor: pointer;
  }
  img {
    cursor: pointer;
    transition: filter 0.2s;
  }
  img:hover {
    filter: brightness(0.9);
  }
"""

_CSS_RULE = re.compile(r"([^{}]+)\{((?:[^{}]|\{\{[^{}]*\}\})*)\}")
_COLOR_PLACEHOLDER = re.compile(r"\{\{color\.([^}]+)\}\}")
_TEXT_PLACEHOLDER = re.compile(r"\{\{text\.([^}]+)\}\}")

EditType = Literal["text", "color", "image"]


def _substitute_images(source: str, images: Dict[str, str]) -> str:
    for key, value in images.items():
        source = source.replace(placeholder("image", key), value)
    return source


def _wrap_text_placeholders(soup: BeautifulSoup, text: Dict[str, str]) -> int:
    """Replace `{{text.K}}` inside text nodes with editable spans; returns the span count."""
    wrapped = 0
    for node in list(soup.find_all(string=_TEXT_PLACEHOLDER)):
        if isinstance(node, (Comment, Script, Stylesheet)):
            continue

        pieces: List[NavigableString | Tag] = []
        cursor = 0
        for match in _TEXT_PLACEHOLDER.finditer(node):
            key = match.group(1)
            if key not in text:
                continue
            if match.start() > cursor:
                pieces.append(NavigableString(node[cursor : match.start()]))
            span = soup.new_tag(
                "span",
                attrs={"class": TEXT_CLASS, "data-edit-type": "text", "data-edit-key": key},
            )
            span.string = text[key]
            pieces.append(span)
            cursor = match.end()
            wrapped += 1

        if not pieces:
            continue
        if cursor < len(node):
            pieces.append(NavigableString(node[cursor:]))

        first = pieces[0]
        node.replace_with(first)
        anchor = first
        for piece in pieces[1:]:
            anchor.insert_after(piece)
            anchor = piece
    return wrapped


def _resolve_text_attributes(soup: BeautifulSoup, text: Dict[str, str]) -> None:
    for tag in soup.find_all(True):
        for name, value in list(tag.attrs.items()):
            if isinstance(value, str) and "{{text." in value:
                for key, replacement in text.items():
                    value = value.replace(placeholder("text", key), replacement)
                tag[name] = value


def color_rules(css_structure: str) -> Dict[str, List[str]]:
    """Map each color key to the selectors of the rules that use it."""
    rules: Dict[str, List[str]] = {}
    for selectors, declarations in _CSS_RULE.findall(css_structure):
        keys = _COLOR_PLACEHOLDER.findall(declarations)
        if not keys:
            continue
        for selector in selectors.split(","):
            selector = selector.split("::")[0].strip()
            if not selector or selector.startswith("@"):
                continue
            for key in keys:
                rules.setdefault(key, []).append(selector)
    return rules


def _tag_color_elements(soup: BeautifulSoup, css_structure: str, colors: Dict[str, str]) -> int:
    tagged = 0
    for key, selectors in color_rules(css_structure).items():
        if key not in colors:
            continue
        for selector in selectors:
            try:
                matches = soup.select(selector)
            except (SelectorSyntaxError, NotImplementedError) as e:
                log.debug(f"Cannot match color selector {selector!r}: {e}")
                continue
            for element in matches:
                if element.has_attr("data-edit-type"):
                    continue
                element["data-edit-type"] = "color"
                element["data-edit-key"] = key
                tagged += 1
    return tagged


def build_interactive_markup(template: Template, customizations: Customizations) -> str:
    """Render template markup with editable text spans and color tags, plus the hover style."""
    html = _substitute_images(template.html_structure, customizations.images)
    soup = BeautifulSoup(html, "html.parser")

    spans = _wrap_text_placeholders(soup, customizations.text)
    _resolve_text_attributes(soup, customizations.text)
    colored = _tag_color_elements(soup, template.css_structure, customizations.colors)
    log.debug(f"Interactive markup for {template.id}: {spans} text spans, {colored} color elements")

    css = render_css(template, customizations)
    return (
        f'<style id="{OVERLAY_STYLE_ID}">{OVERLAY_STYLE}</style>'
        f"<style>{css}</style>{soup}"
    )


def remove_overlay_style(markup: str) -> str:
    """Drop the injected hover style block, leaving the rendered template untouched."""
    soup = BeautifulSoup(markup, "html.parser")
    for block in soup.select(f"style#{OVERLAY_STYLE_ID}"):
        block.decompose()
    return str(soup)


def resolve_image_key(src: str, images: Dict[str, str]) -> Optional[str]:
    """Find the image key whose URL appears in `src`; the last matching key wins."""
    found = None
    for key, url in images.items():
        if url and url in src:
            found = key
    return found


class ActiveEdit(BaseModel):
    type: EditType
    key: str
    value: str


class ColorPickerRequest(BaseModel):
    key: str
    value: str
    left: float
    top: float


class InlineEditController:
    """Click-to-edit state for one editor session; at most one edit is active."""

    def __init__(self, session: EditorSession):
        self.session = session
        self.active: Optional[ActiveEdit] = None

    def _require_template(self) -> None:
        if self.session.template is None:
            raise NoTemplateSelectedError("No template selected for inline editing")

    # text

    def begin_text_edit(self, key: str) -> ActiveEdit:
        self._require_template()
        current = self.session.customizations.text.get(key, "")
        self.active = ActiveEdit(type="text", key=key, value=current)
        return self.active

    def commit_text(self, value: str) -> None:
        """Blur or Enter on the inline input: store the value and restore static text."""
        if self.active is None or self.active.type != "text":
            return
        self.session.update_text(self.active.key, value)
        self.active = None

    def handle_text_key(self, key_name: str, value: str) -> bool:
        if key_name == "Enter":
            self.commit_text(value)
            return True
        return False

    # color

    def begin_color_edit(self, key: str, left: float, top: float) -> ColorPickerRequest:
        self._require_template()
        current = self.session.customizations.colors.get(key) or global_config.editor.default_picker_color
        self.active = ActiveEdit(type="color", key=key, value=current)
        return ColorPickerRequest(key=key, value=current, left=left, top=top)

    def change_color(self, value: str) -> None:
        if self.active is None or self.active.type != "color":
            return
        self.session.update_color(self.active.key, value)
        self.active = self.active.model_copy(update={"value": value})

    def close_color_picker(self) -> None:
        if self.active is not None and self.active.type == "color":
            self.active = None

    # image

    def begin_image_edit(self, src: str) -> Optional[ActiveEdit]:
        self._require_template()
        images = self.session.customizations.images
        key = resolve_image_key(src, images)
        if key is None:
            log.debug(f"Clicked image {src!r} does not match any image customization")
            return None
        self.active = ActiveEdit(type="image", key=key, value=images.get(key, ""))
        return self.active

    def submit_image(self, value: str) -> None:
        if self.active is None or self.active.type != "image":
            return
        self.session.update_image(self.active.key, value)
        self.active = None

    def dismiss(self) -> None:
        """Click outside the image overlay: close it without committing anything."""
        if self.active is not None and self.active.type == "image":
            self.active = None
