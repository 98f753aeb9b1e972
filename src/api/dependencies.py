"""Shared FastAPI dependencies for editor routes."""

from fastapi import Depends, HTTPException, Request, status

from src.services.customizer.exceptions import EditorSessionNotFoundError
from src.services.editor.registry import EditorSessionRegistry, EditorWorkspace
from src.utils.context import editor_session_id


def get_editor_registry(request: Request) -> EditorSessionRegistry:
    return request.app.state.editor_sessions


async def get_workspace(
    session_id: str,
    registry: EditorSessionRegistry = Depends(get_editor_registry),
) -> EditorWorkspace:
    """Resolve the workspace for `session_id` and tag log lines with it."""
    try:
        workspace = registry.get(session_id)
    except EditorSessionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    editor_session_id.set(session_id)
    return workspace
