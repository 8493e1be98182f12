from __future__ import annotations
import secrets
from datetime import date, datetime, timezone
from sqlalchemy import String, Integer, Date, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column
from .db import Base


def new_id(prefix: str) -> str:
    return f"{prefix}_{secrets.token_urlsafe(8)}"

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

class SurveyResponse(Base):
    __tablename__ = "survey_responses"
    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: new_id("sr"))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    full_name: Mapped[str] = mapped_column(String(50))
    email: Mapped[str] = mapped_column(String(255), index=True)
    contact_number: Mapped[str] = mapped_column(String(10))
    date_of_birth: Mapped[date] = mapped_column(Date)
    favorite_foods: Mapped[list[str]] = mapped_column(JSON)

    # 1..5
    eat_out: Mapped[int] = mapped_column(Integer)
    watch_movies: Mapped[int] = mapped_column(Integer)
    watch_tv: Mapped[int] = mapped_column(Integer)
    listen_radio: Mapped[int] = mapped_column(Integer)
