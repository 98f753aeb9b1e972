from datetime import datetime, timezone
import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import relationship

from src.db.models import Base


class UserTemplates(Base):
    """A template purchased by a user."""

    __tablename__ = "user_templates"
    __table_args__ = (
        Index("idx_user_templates_user_id", "user_id"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, nullable=False)
    template_id = Column(
        String,
        ForeignKey("templates.id", ondelete="CASCADE"),
        nullable=False,
    )
    purchased_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    template = relationship("Templates", lazy="joined")
