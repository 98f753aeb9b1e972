from src.db.models.public.templates import Templates
from src.db.models.public.user_templates import UserTemplates

__all__ = [
    "Templates",
    "UserTemplates",
]
