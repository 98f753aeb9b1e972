"""Element list and per-element property controls."""

from typing import List

from fastapi import APIRouter, Depends

from src.api.dependencies import get_workspace
from src.api.errors import to_http_exception
from src.api.routes.editor.models import ElementState, ElementUpdate, ElementUpdateResponse
from src.services.customizer.customization_map import (
    ElementGroup,
    find_element,
    group_elements,
)
from src.services.customizer.element_controls import (
    BACKGROUND_SWATCHES,
    FONT_SIZES,
    TEXT_COLOR_SWATCHES,
    apply_property_update,
    element_snapshot,
)
from src.services.customizer.exceptions import UnknownElementError
from src.services.customizer.models import CustomizableElement, ElementType
from src.services.editor.registry import EditorWorkspace

router = APIRouter(prefix="/editor/sessions", tags=["Editor"])


def _element_or_404(workspace: EditorWorkspace, element_id: str) -> CustomizableElement:
    element = find_element(workspace.session.customization_map, element_id)
    if element is None:
        raise to_http_exception(UnknownElementError(element_id))
    return element


def _element_state(workspace: EditorWorkspace, element: CustomizableElement) -> ElementState:
    swatches = (
        TEXT_COLOR_SWATCHES if element.type == ElementType.TEXT else BACKGROUND_SWATCHES
    )
    return ElementState(
        element=element,
        values=element_snapshot(element, workspace.session.customizations),
        swatches=swatches,
        font_sizes=FONT_SIZES,
    )


@router.get("/{session_id}/elements", response_model=List[ElementGroup])
async def list_elements(
    workspace: EditorWorkspace = Depends(get_workspace),
) -> List[ElementGroup]:
    """Customizable elements grouped by type, in display order."""
    return group_elements(workspace.session.customization_map)


@router.get("/{session_id}/elements/{element_id}", response_model=ElementState)
async def get_element(
    element_id: str,
    workspace: EditorWorkspace = Depends(get_workspace),
) -> ElementState:
    return _element_state(workspace, _element_or_404(workspace, element_id))


@router.put("/{session_id}/elements/{element_id}", response_model=ElementUpdateResponse)
async def update_element(
    element_id: str,
    update: ElementUpdate,
    workspace: EditorWorkspace = Depends(get_workspace),
) -> ElementUpdateResponse:
    element = _element_or_404(workspace, element_id)
    applied = apply_property_update(workspace.session, element, update.property, update.value)
    return ElementUpdateResponse(applied=applied, state=_element_state(workspace, element))
