# To make this a package, we need to have an __init__.py file

from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.engine import Engine


# Base has to be defined before the model imports below, because the models subclass it
class Base(DeclarativeBase):  # type: ignore
    pass


from src.db.models.public.templates import Templates  # noqa
from src.db.models.public.user_templates import UserTemplates  # noqa


def create_all_tables(engine: Engine) -> None:
    Base.metadata.create_all(bind=engine)


__all__ = [
    "Base",
    "create_all_tables",
    "Templates",
    "UserTemplates",
]
