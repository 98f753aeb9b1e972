import json
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from loguru import logger as log
from pydantic import BaseModel, Field

from src.services.customizer.models import Template


class Purchase(BaseModel):
    user_id: str
    template_id: str
    purchased_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class TemplateLoader:
    """Reads template and purchase seed data from a JSON file.

    Expected shape: {"templates": [...], "purchases": [...]}.
    """

    def __init__(self, templates_file: Optional[Path] = None):
        if templates_file is None:
            # Assume running from root
            self.templates_file = Path.cwd() / "data" / "templates.json"
        else:
            self.templates_file = Path(templates_file)

        self.templates: List[Template] = []
        self.purchases: List[Purchase] = []
        self._load()

    def _load(self):
        if not self.templates_file.exists():
            log.warning(f"Template seed file not found: {self.templates_file}")
            return

        with open(self.templates_file, "r") as f:
            data = json.load(f)
            self.templates = [Template(**t) for t in data.get("templates", [])]
            self.purchases = [Purchase(**p) for p in data.get("purchases", [])]

        log.info(
            f"Loaded {len(self.templates)} templates and {len(self.purchases)} purchases "
            f"from {self.templates_file}"
        )

    def get_template(self, template_id: str) -> Optional[Template]:
        for template in self.templates:
            if template.id == template_id:
                return template
        return None

    def list_templates(self) -> List[Template]:
        return self.templates

    def purchases_for(self, user_id: str) -> List[Purchase]:
        return [p for p in self.purchases if p.user_id == user_id]
