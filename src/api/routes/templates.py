"""
Template Routes

Read-only access to templates and to the templates a user has purchased.
"""

from typing import List

from fastapi import APIRouter, Depends
from loguru import logger as log
from sqlalchemy.orm import Session

from src.api.errors import to_http_exception
from src.db.database import get_db_session
from src.services.customizer.exceptions import TemplateStudioError
from src.services.customizer.models import Template, UserTemplate
from src.services.templates.repository import TemplateRepository

router = APIRouter(tags=["Templates"])


@router.get("/templates/{template_id}", response_model=Template)
async def get_template(
    template_id: str,
    db: Session = Depends(get_db_session),
) -> Template:
    """Fetch a single template by id."""
    try:
        return TemplateRepository(db).get_template(template_id)
    except TemplateStudioError as e:
        log.warning(f"Template {template_id} unavailable: {e}")
        raise to_http_exception(e)


@router.get("/users/{user_id}/templates", response_model=List[UserTemplate])
async def get_user_templates(
    user_id: str,
    db: Session = Depends(get_db_session),
) -> List[UserTemplate]:
    """List the templates `user_id` has purchased, each joined with its template."""
    try:
        return TemplateRepository(db).get_user_templates(user_id)
    except TemplateStudioError as e:
        log.warning(f"Purchased templates for {user_id} unavailable: {e}")
        raise to_http_exception(e)
