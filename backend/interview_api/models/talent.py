"""
Talent profile and career path documents (read-only for this service).
"""
from sqlalchemy import String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from interview_api.database.connection import Base

CAREER_STAGES = ("Pathfinder", "Trailblazer", "Horizon Changer")


class Talent(Base):
    __tablename__ = "talents"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    talent_id: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    fullname: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # One of CAREER_STAGES
    career_stage: Mapped[str | None] = mapped_column(String(50), nullable=True)
    selected_path: Mapped[str | None] = mapped_column(String(64), nullable=True)

    skills: Mapped[list] = mapped_column(JSONB, default=list, nullable=False)
    degrees: Mapped[list] = mapped_column(JSONB, default=list, nullable=False)
    interests: Mapped[list] = mapped_column(JSONB, default=list, nullable=False)
    certifications: Mapped[list] = mapped_column(JSONB, default=list, nullable=False)


class CareerPath(Base):
    __tablename__ = "career_paths"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
