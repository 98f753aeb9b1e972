"""
Export Routes

Copy-to-clipboard payload and zip archive download.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse, Response

from src.api.dependencies import get_workspace
from src.api.errors import to_http_exception
from src.api.routes.editor.models import CopyResponse
from src.services.customizer.exceptions import NoTemplateSelectedError
from src.services.customizer.export import ExportService, content_disposition
from src.services.customizer.models import Template
from src.services.editor.registry import EditorWorkspace

router = APIRouter(prefix="/editor/sessions", tags=["Export"])


def _selected_template(workspace: EditorWorkspace) -> Template:
    if workspace.session.template is None:
        raise to_http_exception(NoTemplateSelectedError("No template selected"))
    return workspace.session.template


@router.post("/{session_id}/export/copy", response_model=CopyResponse)
async def copy_code(workspace: EditorWorkspace = Depends(get_workspace)) -> CopyResponse:
    template = _selected_template(workspace)
    result = ExportService.copy_code(template, workspace.session.customizations)
    if result.code is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=result.notification.model_dump(mode="json"),
        )
    return CopyResponse(code=result.code, notification=result.notification)


@router.get("/{session_id}/export/zip")
async def download_zip(workspace: EditorWorkspace = Depends(get_workspace)) -> Response:
    template = _selected_template(workspace)
    result = ExportService.download_zip(template, workspace.session.customizations)
    if not result.success:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"notification": result.notification.model_dump(mode="json")},
        )
    return Response(
        content=result.content,
        media_type="application/zip",
        headers={
            "Content-Disposition": content_disposition(result.filename),
            "X-Notification": result.notification.message,
        },
    )
