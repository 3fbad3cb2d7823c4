from datetime import datetime, timezone
from typing import Dict
from sqlalchemy import Boolean, DateTime, Integer, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from string_analyzer.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StoredString(Base):
    __tablename__ = "strings"

    # Surrogate key; also gives the creation order used when listing
    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sha256_hash: Mapped[str] = mapped_column(String(64), unique=True, index=True, nullable=False)
    value: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    length: Mapped[int] = mapped_column(Integer, nullable=False)
    is_palindrome: Mapped[bool] = mapped_column(Boolean, nullable=False)
    unique_characters: Mapped[int] = mapped_column(Integer, nullable=False)
    word_count: Mapped[int] = mapped_column(Integer, nullable=False)
    character_frequency_map: Mapped[Dict[str, int]] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
