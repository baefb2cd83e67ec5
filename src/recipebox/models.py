"""SQLAlchemy database models."""

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from recipebox.database import Base


class Recipe(Base):
    """Recipe owned by a user, optionally shared with a family cookbook."""

    __tablename__ = "recipes"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    prep_time: Mapped[str | None] = mapped_column(String(50), nullable=True)  # "30 min"
    cook_time: Mapped[str | None] = mapped_column(String(50), nullable=True)
    servings: Mapped[int | None] = mapped_column(Integer, nullable=True)
    source: Mapped[str | None] = mapped_column(Text, nullable=True)
    total_time: Mapped[str | None] = mapped_column(String(50), nullable=True)
    # Structured ingredient dicts or plain strings, stored verbatim
    ingredients: Mapped[list] = mapped_column(JSON, default=list)
    instructions: Mapped[list] = mapped_column(JSON, default=list)
    tags: Mapped[list] = mapped_column(JSON, default=list)
    is_public: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    family_id: Mapped[str | None] = mapped_column(String, nullable=True)
    created_by: Mapped[str | None] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    __table_args__ = (
        Index("idx_recipes_created_by", "created_by"),
        Index("idx_recipes_family_id", "family_id"),
        Index("idx_recipes_is_public", "is_public"),
    )
