"""Translation of pipeline errors into HTTP errors."""

from fastapi import HTTPException, status
from loguru import logger as log

from src.services.customizer.exceptions import (
    InvalidTargetError,
    NoTemplateSelectedError,
    TemplateNotFoundError,
    TemplateStudioError,
    TemplateUnavailableError,
    UnknownElementError,
)


def to_http_exception(error: TemplateStudioError) -> HTTPException:
    if isinstance(error, TemplateNotFoundError):
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "code": "template_not_found",
                "message": "Template not found",
                "recovery_link": error.recovery_link,
            },
        )
    if isinstance(error, TemplateUnavailableError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={
                "code": "template_unavailable",
                "message": str(error),
                "recovery_link": error.recovery_link,
            },
        )
    if isinstance(error, UnknownElementError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, (InvalidTargetError, NoTemplateSelectedError)):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))

    log.error(f"Unhandled template studio error: {error}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(error)
    )
