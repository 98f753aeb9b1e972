from typing import Dict, List, Optional

from pydantic import BaseModel

from src.services.customizer.models import (
    CustomizableElement,
    Customizations,
    ElementProperty,
    Notification,
)
from src.services.editor.registry import EditorWorkspace
from src.services.preview.overlay import ActiveEdit, ColorPickerRequest
from src.services.preview.renderer import PreviewState


class OpenSessionRequest(BaseModel):
    template_id: str


class SessionState(BaseModel):
    session_id: str
    template_id: Optional[str] = None
    template_name: Optional[str] = None
    revision: int
    customizations: Customizations
    customization_map: List[CustomizableElement]

    @classmethod
    def of(cls, workspace: EditorWorkspace) -> "SessionState":
        session = workspace.session
        template = session.template
        return cls(
            session_id=session.session_id,
            template_id=template.id if template else None,
            template_name=template.name if template else None,
            revision=session.revision,
            customizations=session.customizations,
            customization_map=session.customization_map,
        )


class ValueUpdate(BaseModel):
    value: str


class ElementState(BaseModel):
    element: CustomizableElement
    values: Dict[str, str]
    swatches: List[str]
    font_sizes: List[str]


class ElementUpdate(BaseModel):
    property: ElementProperty
    value: str


class ElementUpdateResponse(BaseModel):
    applied: bool
    state: ElementState


class PreviewResponse(BaseModel):
    state: PreviewState
    document: Optional[str] = None


class TextEditRequest(BaseModel):
    key: str
    value: str


class ColorEditRequest(BaseModel):
    key: str
    value: str
    left: float = 0
    top: float = 0


class ImageEditRequest(BaseModel):
    src: str
    value: Optional[str] = None


class InlineEditResponse(BaseModel):
    applied: bool
    edit: Optional[ActiveEdit] = None
    picker: Optional[ColorPickerRequest] = None
    revision: int


class CopyResponse(BaseModel):
    code: Optional[str] = None
    notification: Notification
