from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

TARGET_BUCKETS = ("text", "colors", "images")


class ElementType(str, Enum):
    TEXT = "text"
    IMAGE = "image"
    CONTAINER = "container"
    BUTTON = "button"


class ElementProperty(str, Enum):
    TEXT = "text"
    COLOR = "color"
    BACKGROUND_COLOR = "backgroundColor"
    FONT_SIZE = "fontSize"
    IMAGE_URL = "imageUrl"
    OVERLAY_OPACITY = "overlayOpacity"


class CustomizableFields(BaseModel):
    """Default values for every editable key, one mapping per bucket.

    Absent buckets in stored data load as empty mappings.
    """

    text: Dict[str, str] = Field(default_factory=dict)
    colors: Dict[str, str] = Field(default_factory=dict)
    images: Dict[str, str] = Field(default_factory=dict)

    @field_validator("text", "colors", "images", mode="before")
    @classmethod
    def _none_is_empty(cls, value):
        return {} if value is None else value


class CustomizableElement(BaseModel):
    id: str
    label: str
    type: ElementType
    target: str
    properties: List[ElementProperty]

    @field_validator("target")
    @classmethod
    def _target_points_into_a_bucket(cls, value: str) -> str:
        bucket, _, key = value.partition(".")
        if bucket not in TARGET_BUCKETS or not key:
            raise ValueError(
                f"target must look like '<bucket>.<key>' with bucket in {TARGET_BUCKETS}, got {value!r}"
            )
        return value

    @property
    def bucket(self) -> str:
        return self.target.split(".", 1)[0]

    @property
    def key(self) -> str:
        return self.target.split(".", 1)[1]


class Template(BaseModel):
    id: str
    name: str
    description: str = ""
    thumbnail: str = ""
    html_structure: str = ""
    css_structure: str = ""
    customizable_fields: CustomizableFields = Field(default_factory=CustomizableFields)
    customization_map: Optional[List[CustomizableElement]] = None

    model_config = {"frozen": True}

    @field_validator("customizable_fields", mode="before")
    @classmethod
    def _missing_fields_are_empty(cls, value):
        return {} if value is None else value

    @field_validator("customization_map")
    @classmethod
    def _element_ids_are_unique(cls, value):
        if value is None:
            return value
        seen: set[str] = set()
        for element in value:
            if element.id in seen:
                raise ValueError(f"duplicate element id in customization map: {element.id}")
            seen.add(element.id)
        return value


class Customizations(BaseModel):
    """Working values edited during a session."""

    text: Dict[str, str] = Field(default_factory=dict)
    colors: Dict[str, str] = Field(default_factory=dict)
    images: Dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_fields(cls, fields: CustomizableFields) -> "Customizations":
        """Seed working values with copies of a template's defaults."""
        return cls(
            text=dict(fields.text),
            colors=dict(fields.colors),
            images=dict(fields.images),
        )

    def bucket(self, name: str) -> Dict[str, str]:
        if name not in TARGET_BUCKETS:
            raise KeyError(name)
        return getattr(self, name)


class UserTemplate(BaseModel):
    id: str
    user_id: str
    template_id: str
    purchased_at: datetime
    template: Optional[Template] = None


class NotificationType(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class Notification(BaseModel):
    """Transient message shown after a one-shot action such as an export."""

    type: NotificationType
    message: str
    dismiss_after_seconds: int

    @model_validator(mode="after")
    def _positive_timeout(self):
        if self.dismiss_after_seconds <= 0:
            raise ValueError("dismiss_after_seconds must be positive")
        return self
