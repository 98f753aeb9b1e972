"""
Isolated preview surfaces.

A surface is the rendering context the live preview writes into. Its content
is replaced wholesale on every update (open, write, close), after which it
signals load. `DocumentSurface` is the headless implementation: it parses the
written document with BeautifulSoup, runs the inline scripts it knows about
through Python handlers, and dispatches click events to registered listeners.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional, Protocol, Tuple

from bs4 import BeautifulSoup, Tag
from loguru import logger as log

from src.services.customizer.exceptions import RenderSurfaceUnavailableError
from src.services.preview.document import CONTENT_WRAPPER_CLASS
from src.services.preview.dom import get_style, pixel_length, set_style

EventListener = Callable[[Tag], None]
LoadListener = Callable[[], None]
ScriptHandler = Callable[["DocumentSurface"], None]


@dataclass(frozen=True)
class Size:
    width: float
    height: float


class PreviewSurface(Protocol):
    viewport: Size
    document: Optional[BeautifulSoup]

    def open(self) -> None: ...

    def write(self, markup: str) -> None: ...

    def close(self) -> None: ...

    def add_load_listener(self, listener: LoadListener) -> Callable[[], None]: ...

    def get_hook(self, name: str) -> Optional[Callable[[], object]]: ...

    def query_all(self, selector: str) -> List[Tag]: ...

    def add_event_listener(
        self, target: Tag, event: str, listener: EventListener, owner: str | None = None
    ) -> None: ...

    def remove_event_listeners(self, target: Tag, event: str) -> None: ...

    def measure(self) -> Size: ...

    def set_wrapper_scale(self, scale: float) -> None: ...


def declared_content_size(document: BeautifulSoup) -> Size:
    """
    Largest explicit pixel width/height declared inside the content wrapper.

    The headless surface has no layout engine, so width/height attributes and
    inline `width`/`height` styles stand in for rendered bounds.
    """
    wrapper = document.select_one(f".{CONTENT_WRAPPER_CLASS}")
    if wrapper is None:
        return Size(0, 0)

    width = height = 0.0
    for element in wrapper.find_all(True):
        w = pixel_length(get_style(element, "width")) or pixel_length(element.get("width"))
        h = pixel_length(get_style(element, "height")) or pixel_length(element.get("height"))
        width = max(width, w or 0.0)
        height = max(height, h or 0.0)
    return Size(width, height)


def script_body(markup: str) -> str:
    """Inner text of a `<script>...</script>` literal."""
    start = markup.index(">") + 1
    end = markup.rindex("</script>")
    return markup[start:end]


class DocumentSurface:
    def __init__(
        self,
        viewport: Size = Size(1024, 768),
        script_handlers: Mapping[str, ScriptHandler] | None = None,
        measure: Callable[[BeautifulSoup], Size] = declared_content_size,
    ):
        self.viewport = viewport
        self.script_handlers: Dict[str, ScriptHandler] = dict(script_handlers or {})
        self._measure = measure
        self.document: Optional[BeautifulSoup] = None
        self.hooks: Dict[str, Callable[[], object]] = {}
        self.load_count = 0
        self._buffer: Optional[List[str]] = None
        self._load_listeners: List[LoadListener] = []
        self._event_listeners: Dict[int, List[Tuple[str, Optional[str], EventListener]]] = {}

    # -- document lifecycle ---------------------------------------------

    def open(self) -> None:
        """Discard the current document, its hooks and every element listener."""
        self._buffer = []
        self.document = None
        self.hooks = {}
        self._event_listeners = {}

    def write(self, markup: str) -> None:
        if self._buffer is None:
            raise RenderSurfaceUnavailableError("Preview document is not open for writing")
        self._buffer.append(markup)

    def close(self) -> None:
        if self._buffer is None:
            raise RenderSurfaceUnavailableError("Preview document is not open")

        markup = "".join(self._buffer)
        self._buffer = None
        self.document = BeautifulSoup(markup, "html.parser")
        self._run_scripts()

        self.load_count += 1
        for listener in list(self._load_listeners):
            listener()

    def _run_scripts(self) -> None:
        assert self.document is not None
        for script in self.document.find_all("script"):
            body = (script.string or "").strip()
            handler = self.script_handlers.get(body)
            if handler is None:
                log.debug(f"Skipping unrecognised inline script ({len(body)} chars)")
                continue
            handler(self)

    # -- load signal and hooks ------------------------------------------

    def add_load_listener(self, listener: LoadListener) -> Callable[[], None]:
        self._load_listeners.append(listener)

        def remove() -> None:
            if listener in self._load_listeners:
                self._load_listeners.remove(listener)

        return remove

    def expose_hook(self, name: str, hook: Callable[[], object]) -> None:
        self.hooks[name] = hook

    def get_hook(self, name: str) -> Optional[Callable[[], object]]:
        return self.hooks.get(name)

    # -- elements and events --------------------------------------------

    def _require_document(self) -> BeautifulSoup:
        if self.document is None:
            raise RenderSurfaceUnavailableError("Cannot access preview document")
        return self.document

    def query_all(self, selector: str) -> List[Tag]:
        return list(self._require_document().select(selector))

    def query(self, selector: str) -> Optional[Tag]:
        return self._require_document().select_one(selector)

    def add_event_listener(
        self, target: Tag, event: str, listener: EventListener, owner: str | None = None
    ) -> None:
        """Register `listener`; a listener with the same owner on the same target is replaced."""
        entries = self._event_listeners.setdefault(id(target), [])
        if owner is not None:
            entries[:] = [e for e in entries if not (e[0] == event and e[1] == owner)]
        entries.append((event, owner, listener))

    def remove_event_listeners(self, target: Tag, event: str) -> None:
        entries = self._event_listeners.get(id(target), [])
        entries[:] = [e for e in entries if e[0] != event]

    def listener_count(self, target: Tag, event: str = "click") -> int:
        return sum(1 for e in self._event_listeners.get(id(target), []) if e[0] == event)

    def dispatch(self, target: Tag, event: str = "click") -> None:
        """Deliver `event` to `target` and then to each ancestor."""
        self._require_document()
        node: Optional[Tag] = target
        while node is not None:
            for name, _, listener in list(self._event_listeners.get(id(node), [])):
                if name == event:
                    listener(node)
            node = node.parent

    def click(self, target: Tag) -> None:
        self.dispatch(target, "click")

    # -- geometry ---------------------------------------------------------

    def measure(self) -> Size:
        return self._measure(self._require_document())

    def set_wrapper_scale(self, scale: float) -> None:
        wrapper = self.query(f".{CONTENT_WRAPPER_CLASS}")
        if wrapper is None:
            raise RenderSurfaceUnavailableError("Preview content wrapper is missing")
        set_style(wrapper, "transform", f"scale({scale})")
