"""Small helpers for inline styles and classes on BeautifulSoup tags."""

import re
from typing import Dict

from bs4 import Tag

_PX = re.compile(r"^\s*(\d+(?:\.\d+)?)(?:px)?\s*$")


def parse_style(tag: Tag) -> Dict[str, str]:
    declarations: Dict[str, str] = {}
    for chunk in str(tag.get("style", "")).split(";"):
        name, sep, value = chunk.partition(":")
        if sep and name.strip():
            declarations[name.strip().lower()] = value.strip()
    return declarations


def set_style(tag: Tag, name: str, value: str) -> None:
    declarations = parse_style(tag)
    declarations[name] = value
    tag["style"] = "; ".join(f"{k}: {v}" for k, v in declarations.items()) + ";"


def get_style(tag: Tag, name: str) -> str | None:
    return parse_style(tag).get(name)


def classes(tag: Tag) -> list[str]:
    value = tag.get("class") or []
    if isinstance(value, str):
        return value.split()
    return list(value)


def has_class(tag: Tag, name: str) -> bool:
    return name in classes(tag)


def add_class(tag: Tag, name: str) -> None:
    current = classes(tag)
    if name not in current:
        tag["class"] = current + [name]


def remove_class(tag: Tag, name: str) -> None:
    current = classes(tag)
    if name in current:
        current.remove(name)
        tag["class"] = current


def pixel_length(value: object) -> float | None:
    """`"320px"` or `"320"` -> 320.0; anything relative or unparseable -> None."""
    if value is None:
        return None
    match = _PX.match(str(value))
    return float(match.group(1)) if match else None
