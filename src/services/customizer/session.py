"""
Editor session state.

One `EditorSession` exists per open editor. It owns the selected template, the
working customizations and the derived element map, and notifies subscribers
(the live preview) after every change.
"""

from typing import Callable, List, Optional

from loguru import logger as log

from src.services.customizer.code_generator import assemble
from src.services.customizer.customization_map import derive_map
from src.services.customizer.exceptions import InvalidTargetError, NoTemplateSelectedError
from src.services.customizer.models import (
    TARGET_BUCKETS,
    CustomizableElement,
    Customizations,
    Template,
)

ChangeListener = Callable[["EditorSession"], None]


class EditorSession:
    def __init__(self, session_id: str, template: Optional[Template] = None):
        self.session_id = session_id
        self.template: Optional[Template] = None
        self._customizations = Customizations()
        self.customization_map: List[CustomizableElement] = []
        self.revision = 0
        self._listeners: List[ChangeListener] = []
        self._code_cache: tuple[int, int, str] | None = None

        if template is not None:
            self.select_template(template)

    # -- lifecycle -------------------------------------------------------

    def select_template(self, template: Template) -> None:
        """Make `template` the edited template and seed customizations from its defaults."""
        self.template = template
        self._customizations = Customizations.from_fields(template.customizable_fields)
        self.customization_map = derive_map(template)
        log.info(f"Session {self.session_id} editing template {template.id}")
        self._changed()

    def clear(self) -> None:
        """Drop the selected template and all working values."""
        self.template = None
        self._customizations = Customizations()
        self.customization_map = []
        self._changed()

    # -- edits -----------------------------------------------------------

    def update_text(self, key: str, value: str) -> None:
        self.update("text", key, value)

    def update_color(self, key: str, value: str) -> None:
        self.update("colors", key, value)

    def update_image(self, key: str, value: str) -> None:
        self.update("images", key, value)

    def update(self, bucket: str, key: str, value: str) -> None:
        if self.template is None:
            raise NoTemplateSelectedError("No template selected")
        if bucket not in TARGET_BUCKETS:
            raise InvalidTargetError(f"Unknown customization bucket: {bucket}")
        self._customizations.bucket(bucket)[key] = value
        self._changed()

    def reset(self) -> None:
        """Restore the selected template's defaults, discarding every edit."""
        if self.template is not None:
            self._customizations = Customizations.from_fields(
                self.template.customizable_fields
            )
        else:
            self._customizations = Customizations()
        self._changed()

    # -- reads -----------------------------------------------------------

    @property
    def customizations(self) -> Customizations:
        """Snapshot of the working values; mutating it does not affect the session."""
        return self._customizations.model_copy(deep=True)

    def final_code(self) -> str:
        """Assembled output for the current state, memoized per template and revision."""
        if self.template is None:
            return ""

        cache_key = (id(self.template), self.revision)
        if self._code_cache is not None and self._code_cache[:2] == cache_key:
            return self._code_cache[2]

        code = assemble(self.template, self._customizations)
        self._code_cache = (*cache_key, code)
        return code

    # -- change notification --------------------------------------------

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _changed(self) -> None:
        self.revision += 1
        for listener in list(self._listeners):
            listener(self)
