"""Read access to stored templates and purchases."""

from typing import List, cast

from loguru import logger as log
from pydantic import ValidationError
from sqlalchemy.orm import Session

from src.db.models.public.templates import Templates
from src.db.models.public.user_templates import UserTemplates
from src.db.utils.db_transaction import db_transaction, read_db_transaction
from src.services.customizer.exceptions import (
    TemplateNotFoundError,
    TemplateUnavailableError,
)
from src.services.customizer.models import Template, UserTemplate
from src.services.templates.loader import TemplateLoader


def to_template(row: Templates) -> Template:
    try:
        return Template(
            id=cast(str, row.id),
            name=cast(str, row.name),
            description=cast(str, row.description or ""),
            thumbnail=cast(str, row.thumbnail or ""),
            html_structure=cast(str, row.html_structure or ""),
            css_structure=cast(str, row.css_structure or ""),
            customizable_fields=row.customizable_fields or {},
            customization_map=row.customization_map,
        )
    except ValidationError as e:
        log.error(f"Stored template {row.id} is malformed: {e}")
        raise TemplateUnavailableError() from e


def to_user_template(row: UserTemplates) -> UserTemplate:
    return UserTemplate(
        id=cast(str, row.id),
        user_id=cast(str, row.user_id),
        template_id=cast(str, row.template_id),
        purchased_at=row.purchased_at,
        template=to_template(row.template) if row.template is not None else None,
    )


class TemplateRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_template(self, template_id: str) -> Template:
        """Fetch one template; raises TemplateNotFoundError if there is none."""
        with read_db_transaction(self.db, template_id=template_id):
            row = self.db.get(Templates, template_id)
        if row is None:
            raise TemplateNotFoundError(template_id)
        return to_template(row)

    def get_user_templates(self, user_id: str) -> List[UserTemplate]:
        """Templates purchased by `user_id`, joined with the template record."""
        with read_db_transaction(self.db, user_id=user_id):
            rows = (
                self.db.query(UserTemplates)
                .filter(UserTemplates.user_id == user_id)
                .order_by(UserTemplates.purchased_at)
                .all()
            )
        log.debug(f"Fetched {len(rows)} purchased templates for user {user_id}")
        return [to_user_template(row) for row in rows]

    def save_template(self, template: Template) -> None:
        """Insert or replace a template record."""
        fields = template.customizable_fields.model_dump()
        element_map = (
            [element.model_dump(mode="json") for element in template.customization_map]
            if template.customization_map is not None
            else None
        )
        with db_transaction(self.db):
            self.db.merge(
                Templates(
                    id=template.id,
                    name=template.name,
                    description=template.description,
                    thumbnail=template.thumbnail,
                    html_structure=template.html_structure,
                    css_structure=template.css_structure,
                    customizable_fields=fields,
                    customization_map=element_map,
                )
            )

    def record_purchase(self, user_id: str, template_id: str, purchased_at=None) -> None:
        with db_transaction(self.db):
            purchase = UserTemplates(user_id=user_id, template_id=template_id)
            if purchased_at is not None:
                purchase.purchased_at = purchased_at
            self.db.add(purchase)

    def seed_from(self, loader: TemplateLoader) -> int:
        """Store every template from `loader` and the purchases not recorded yet."""
        for template in loader.list_templates():
            self.save_template(template)

        for purchase in loader.purchases:
            exists = (
                self.db.query(UserTemplates)
                .filter(
                    UserTemplates.user_id == purchase.user_id,
                    UserTemplates.template_id == purchase.template_id,
                )
                .first()
            )
            if exists is None:
                self.record_purchase(
                    purchase.user_id, purchase.template_id, purchase.purchased_at
                )
        return len(loader.list_templates())
