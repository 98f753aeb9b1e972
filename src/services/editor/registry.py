"""
Open editor sessions.

Each workspace bundles the session state with its live preview and its inline
editing controller. A workspace is created when a template is selected and
dropped when the template is cleared.
"""

import uuid
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Optional

from loguru import logger as log

from common import global_config
from src.services.customizer.exceptions import EditorSessionNotFoundError
from src.services.customizer.models import Template
from src.services.customizer.session import EditorSession
from src.services.preview.embedded_scripts import create_document_surface
from src.services.preview.overlay import InlineEditController
from src.services.preview.renderer import PreviewRenderer
from src.services.preview.surface import PreviewSurface

SurfaceFactory = Callable[[], Optional[PreviewSurface]]


@dataclass
class EditorWorkspace:
    session: EditorSession
    preview: PreviewRenderer
    inline: InlineEditController
    _unsubscribe: Callable[[], None]

    @property
    def session_id(self) -> str:
        return self.session.session_id

    def detach(self) -> None:
        self._unsubscribe()
        self.preview.cancel()


class EditorSessionRegistry:
    def __init__(
        self,
        max_sessions: Optional[int] = None,
        surface_factory: SurfaceFactory = create_document_surface,
        debounce_seconds: Optional[float] = None,
    ):
        self.max_sessions = max_sessions or global_config.editor.max_sessions
        self.surface_factory = surface_factory
        self.debounce_seconds = debounce_seconds
        self._workspaces: "OrderedDict[str, EditorWorkspace]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._workspaces)

    def open(self, template: Template) -> EditorWorkspace:
        session = EditorSession(uuid.uuid4().hex, template)
        preview = PreviewRenderer(
            self.surface_factory(), debounce_seconds=self.debounce_seconds
        )
        unsubscribe = session.subscribe(
            lambda changed: preview.schedule(changed.final_code())
        )
        workspace = EditorWorkspace(
            session=session,
            preview=preview,
            inline=InlineEditController(session),
            _unsubscribe=unsubscribe,
        )
        preview.schedule(session.final_code())

        self._workspaces[session.session_id] = workspace
        while len(self._workspaces) > self.max_sessions:
            evicted_id, evicted = self._workspaces.popitem(last=False)
            evicted.detach()
            log.warning(f"Evicted editor session {evicted_id}, limit is {self.max_sessions}")

        return workspace

    def get(self, session_id: str) -> EditorWorkspace:
        workspace = self._workspaces.get(session_id)
        if workspace is None:
            raise EditorSessionNotFoundError(session_id)
        self._workspaces.move_to_end(session_id)
        return workspace

    def close(self, session_id: str) -> None:
        """Clear the session's template and forget the workspace."""
        workspace = self._workspaces.pop(session_id, None)
        if workspace is None:
            raise EditorSessionNotFoundError(session_id)
        workspace.detach()
        workspace.session.clear()
        log.info(f"Closed editor session {session_id}")
