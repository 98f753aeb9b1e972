"""
Preview Routes

The live preview and the interactive (click-to-edit) preview mode.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from src.api.dependencies import get_workspace
from src.api.errors import to_http_exception
from src.api.routes.editor.models import (
    ColorEditRequest,
    ImageEditRequest,
    InlineEditResponse,
    PreviewResponse,
    TextEditRequest,
)
from src.services.customizer.exceptions import NoTemplateSelectedError
from src.services.editor.registry import EditorWorkspace
from src.services.preview.overlay import build_interactive_markup, remove_overlay_style

router = APIRouter(prefix="/editor/sessions", tags=["Preview"])


@router.get("/{session_id}/preview", response_model=PreviewResponse)
async def get_preview(workspace: EditorWorkspace = Depends(get_workspace)) -> PreviewResponse:
    """Render any queued edits now and return the preview state and document."""
    workspace.preview.flush()
    return PreviewResponse(
        state=workspace.preview.state,
        document=workspace.preview.document_markup(),
    )


@router.get("/{session_id}/interactive", response_class=HTMLResponse)
async def get_interactive_preview(
    overlay: bool = True,
    workspace: EditorWorkspace = Depends(get_workspace),
) -> str:
    """Editable markup; `overlay=false` leaves edit mode by dropping the hover style block."""
    session = workspace.session
    if session.template is None:
        raise to_http_exception(NoTemplateSelectedError("No template selected"))
    markup = build_interactive_markup(session.template, session.customizations)
    return markup if overlay else remove_overlay_style(markup)


@router.post("/{session_id}/interactive/text", response_model=InlineEditResponse)
async def commit_text_edit(
    request: TextEditRequest,
    workspace: EditorWorkspace = Depends(get_workspace),
) -> InlineEditResponse:
    inline = workspace.inline
    try:
        edit = inline.begin_text_edit(request.key)
    except NoTemplateSelectedError as e:
        raise to_http_exception(e)
    inline.commit_text(request.value)
    return InlineEditResponse(
        applied=True,
        edit=edit,
        revision=workspace.session.revision,
    )


@router.post("/{session_id}/interactive/color", response_model=InlineEditResponse)
async def commit_color_edit(
    request: ColorEditRequest,
    workspace: EditorWorkspace = Depends(get_workspace),
) -> InlineEditResponse:
    inline = workspace.inline
    try:
        picker = inline.begin_color_edit(request.key, request.left, request.top)
    except NoTemplateSelectedError as e:
        raise to_http_exception(e)
    inline.change_color(request.value)
    edit = inline.active
    inline.close_color_picker()
    return InlineEditResponse(
        applied=True,
        edit=edit,
        picker=picker,
        revision=workspace.session.revision,
    )


@router.post("/{session_id}/interactive/image", response_model=InlineEditResponse)
async def commit_image_edit(
    request: ImageEditRequest,
    workspace: EditorWorkspace = Depends(get_workspace),
) -> InlineEditResponse:
    """Resolve the clicked image to its key; submit `value` if given, else dismiss."""
    inline = workspace.inline
    try:
        edit = inline.begin_image_edit(request.src)
    except NoTemplateSelectedError as e:
        raise to_http_exception(e)

    if edit is None:
        return InlineEditResponse(applied=False, revision=workspace.session.revision)

    if request.value is None:
        inline.dismiss()
        return InlineEditResponse(applied=False, edit=edit, revision=workspace.session.revision)

    inline.submit_image(request.value)
    return InlineEditResponse(applied=True, edit=edit, revision=workspace.session.revision)
