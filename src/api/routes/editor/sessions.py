"""
Editor Session Routes

Selecting a template opens an editor session; edits go through the session so
the live preview is rescheduled after every change.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import PlainTextResponse
from loguru import logger as log
from sqlalchemy.orm import Session

from src.api.dependencies import get_editor_registry, get_workspace
from src.api.errors import to_http_exception
from src.api.routes.editor.models import OpenSessionRequest, SessionState, ValueUpdate
from src.db.database import get_db_session
from src.services.customizer.exceptions import (
    EditorSessionNotFoundError,
    TemplateStudioError,
)
from src.services.editor.registry import EditorSessionRegistry, EditorWorkspace
from src.services.templates.repository import TemplateRepository
from src.utils.context import editor_session_id

router = APIRouter(prefix="/editor/sessions", tags=["Editor"])


@router.post("", response_model=SessionState, status_code=status.HTTP_201_CREATED)
async def open_session(
    request: OpenSessionRequest,
    db: Session = Depends(get_db_session),
    registry: EditorSessionRegistry = Depends(get_editor_registry),
) -> SessionState:
    """Select a template for editing; customizations start from its defaults."""
    try:
        template = TemplateRepository(db).get_template(request.template_id)
    except TemplateStudioError as e:
        log.warning(f"Cannot open editor for {request.template_id}: {e}")
        raise to_http_exception(e)

    workspace = registry.open(template)
    editor_session_id.set(workspace.session_id)
    log.info(f"Opened editor session for template {template.id}")
    return SessionState.of(workspace)


@router.get("/{session_id}", response_model=SessionState)
async def get_session(workspace: EditorWorkspace = Depends(get_workspace)) -> SessionState:
    return SessionState.of(workspace)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def close_session(
    session_id: str,
    registry: EditorSessionRegistry = Depends(get_editor_registry),
) -> None:
    try:
        registry.close(session_id)
    except EditorSessionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put("/{session_id}/customizations/{bucket}/{key}", response_model=SessionState)
async def update_customization(
    bucket: str,
    key: str,
    update: ValueUpdate,
    workspace: EditorWorkspace = Depends(get_workspace),
) -> SessionState:
    try:
        workspace.session.update(bucket, key, update.value)
    except TemplateStudioError as e:
        raise to_http_exception(e)
    return SessionState.of(workspace)


@router.post("/{session_id}/reset", response_model=SessionState)
async def reset_session(workspace: EditorWorkspace = Depends(get_workspace)) -> SessionState:
    """Discard every edit and restore the template defaults."""
    workspace.session.reset()
    return SessionState.of(workspace)


@router.get("/{session_id}/code", response_class=PlainTextResponse)
async def get_final_code(workspace: EditorWorkspace = Depends(get_workspace)) -> str:
    return workspace.session.final_code()
