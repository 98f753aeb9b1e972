"""Errors raised by the customization pipeline.

Routes translate these into HTTP responses; nothing here is retried.
"""

RECOVERY_LINK = "/templates"


class TemplateStudioError(Exception):
    """Base class for all template studio errors."""


class TemplateNotFoundError(TemplateStudioError):
    """The storage collaborator has no template with this id."""

    def __init__(self, template_id: str):
        self.template_id = template_id
        self.recovery_link = RECOVERY_LINK
        super().__init__(f"Template not found: {template_id}")


class TemplateUnavailableError(TemplateStudioError):
    """The storage collaborator failed while fetching template data."""

    def __init__(self, message: str = "Failed to load template"):
        self.recovery_link = RECOVERY_LINK
        super().__init__(message)


class EditorSessionNotFoundError(TemplateStudioError):
    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Editor session not found: {session_id}")


class NoTemplateSelectedError(TemplateStudioError):
    """An edit arrived for a session whose template has been cleared."""


class UnknownElementError(TemplateStudioError):
    def __init__(self, element_id: str):
        self.element_id = element_id
        super().__init__(f"Unknown customizable element: {element_id}")


class InvalidTargetError(TemplateStudioError):
    """A bucket or element target does not name text, colors or images."""


class RenderSurfaceUnavailableError(TemplateStudioError):
    """The isolated preview document cannot be reached."""


class ExportError(TemplateStudioError):
    """Packaging or copying the generated code failed."""
