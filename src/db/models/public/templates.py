from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, String, Text

from src.db.models import Base


class Templates(Base):
    """Purchasable HTML/CSS template with its placeholder defaults."""

    __tablename__ = "templates"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    thumbnail = Column(String, nullable=False, default="")
    html_structure = Column(Text, nullable=False, default="")
    css_structure = Column(Text, nullable=False, default="")

    # {"text": {...}, "colors": {...}, "images": {...}}
    customizable_fields = Column(JSON, nullable=True)
    # Optional explicit list of customizable element descriptors
    customization_map = Column(JSON, nullable=True)

    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
