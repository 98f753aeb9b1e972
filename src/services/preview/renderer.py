"""
Live preview renderer.

Edits are debounced; once quiet, the assembled code is wrapped in the preview
document and written into the isolated surface, replacing everything in it.
When the surface signals load, FAQ behaviour is reattached and the content
wrapper is scaled to fit the viewport.
"""

from enum import Enum
from typing import Callable, List, Optional

from loguru import logger as log
from pydantic import BaseModel

from common import global_config
from src.services.customizer.exceptions import RenderSurfaceUnavailableError
from src.services.preview.debounce import Debouncer
from src.services.preview.document import build_preview_document
from src.services.preview.faq import reattach_faq
from src.services.preview.surface import PreviewSurface, Size


class PreviewStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class PreviewState(BaseModel):
    status: PreviewStatus
    generation: int = 0
    error: Optional[str] = None
    scale: Optional[float] = None
    faq_path: Optional[str] = None


BeforeRenderHook = Callable[[str], None]
AfterLoadHook = Callable[[PreviewState], None]


def compute_fit_scale(content: Size, viewport: Size, margin: float) -> Optional[float]:
    """Scale that fits overflowing content into the viewport, or None if it already fits."""
    if content.width <= viewport.width and content.height <= viewport.height:
        return None

    ratios = []
    if content.width > 0:
        ratios.append(viewport.width / content.width * margin)
    if content.height > 0:
        ratios.append(viewport.height / content.height * margin)
    return min(ratios)


class PreviewRenderer:
    def __init__(
        self,
        surface: Optional[PreviewSurface],
        *,
        debounce_seconds: Optional[float] = None,
        fit_margin: Optional[float] = None,
    ):
        self.surface = surface
        self.fit_margin = (
            fit_margin if fit_margin is not None else global_config.editor.fit_margin
        )
        self.state = PreviewState(status=PreviewStatus.LOADING)
        self.before_render: List[BeforeRenderHook] = []
        self.after_load: List[AfterLoadHook] = []
        self._generation = 0
        self._debouncer = Debouncer(
            debounce_seconds
            if debounce_seconds is not None
            else global_config.preview_debounce_seconds,
            self.render,
        )

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def pending(self) -> bool:
        return self._debouncer.pending

    def schedule(self, final_code: str) -> None:
        """Queue a render for when edits have been quiet for the debounce window."""
        self._debouncer.trigger(final_code)

    def flush(self) -> bool:
        """Render the queued code immediately, if any."""
        return self._debouncer.flush()

    def cancel(self) -> None:
        self._debouncer.cancel()

    def render(self, final_code: str) -> int:
        """Replace the surface content with the preview document for `final_code`."""
        self._generation += 1
        generation = self._generation

        if self.surface is None:
            log.error("Preview surface is not available")
            self._fail(generation, "Preview frame not available")
            return generation

        surface = self.surface
        self.state = PreviewState(status=PreviewStatus.LOADING, generation=generation)
        document = build_preview_document(final_code)
        for hook in self.before_render:
            hook(document)

        remove_listener: Callable[[], None] = lambda: None  # noqa: E731

        def on_load() -> None:
            remove_listener()
            self._handle_load(generation)

        remove_listener = surface.add_load_listener(on_load)

        try:
            surface.open()
            surface.write(document)
            surface.close()
        except RenderSurfaceUnavailableError as e:
            remove_listener()
            log.error(f"Cannot access preview document: {e}")
            self._fail(generation, "Cannot access preview document")
        except Exception as e:
            remove_listener()
            log.error(f"Error writing preview document: {e}")
            self._fail(generation, "Failed to update preview")
        else:
            log.debug(f"Preview generation {generation} written ({len(document)} chars)")

        return generation

    def _handle_load(self, generation: int) -> None:
        if generation != self._generation:
            log.debug(
                f"Ignoring load of superseded preview generation {generation} (latest {self._generation})"
            )
            return

        assert self.surface is not None
        try:
            document = self.surface.document
            if document is None:
                raise RenderSurfaceUnavailableError("Cannot access preview document or window")
            faq_path = reattach_faq(self.surface, document)
            scale = self.fit_to_viewport()
        except RenderSurfaceUnavailableError as e:
            log.error(f"Error in preview load handler: {e}")
            self._fail(generation, f"Error loading preview: {e}")
            return

        self.state = PreviewState(
            status=PreviewStatus.READY,
            generation=generation,
            scale=scale,
            faq_path=faq_path,
        )
        for hook in self.after_load:
            hook(self.state)

    def fit_to_viewport(self) -> float:
        """Shrink the content wrapper if the content overflows; returns the scale in effect."""
        assert self.surface is not None
        content = self.surface.measure()
        scale = compute_fit_scale(content, self.surface.viewport, self.fit_margin)
        if scale is None:
            return self.fit_margin
        self.surface.set_wrapper_scale(scale)
        return scale

    def document_markup(self) -> Optional[str]:
        if self.surface is None or self.surface.document is None:
            return None
        return str(self.surface.document)

    def _fail(self, generation: int, message: str) -> None:
        self.state = PreviewState(
            status=PreviewStatus.ERROR, generation=generation, error=message
        )
