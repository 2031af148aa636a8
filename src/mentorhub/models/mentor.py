from datetime import date

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from mentorhub.database import Base
from mentorhub.models._ids import new_id


class Mentor(Base):
    __tablename__ = "mentors"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str | None] = mapped_column(String(36), default=None, index=True)
    full_name: Mapped[str] = mapped_column(String(200))
    email: Mapped[str | None] = mapped_column(String(255), default=None)
    phone: Mapped[str | None] = mapped_column(String(20), default=None, index=True)
    bio: Mapped[str | None] = mapped_column(Text, default=None)
    location: Mapped[str | None] = mapped_column(String(200), default=None)
    profile_image_url: Mapped[str | None] = mapped_column(String(500), default=None)

    title: Mapped[str | None] = mapped_column(String(200), default=None)
    company: Mapped[str | None] = mapped_column(String(200), default=None)
    years_of_experience: Mapped[int] = mapped_column(default=0)
    hourly_rate: Mapped[int] = mapped_column(default=0)
    expertise_level: Mapped[str | None] = mapped_column(String(30), default=None)
    linkedin_url: Mapped[str | None] = mapped_column(String(500), default=None)
    github_url: Mapped[str | None] = mapped_column(String(500), default=None)
    portfolio_url: Mapped[str | None] = mapped_column(String(500), default=None)
    video_intro_url: Mapped[str | None] = mapped_column(String(500), default=None)
    status: Mapped[str] = mapped_column(
        String(30), default="pending_approval"
    )  # pending_approval, approved, rejected


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(100), unique=True)


class Skill(Base):
    __tablename__ = "skills"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(100), unique=True)


class MentorCategory(Base):
    __tablename__ = "mentor_categories"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    mentor_id: Mapped[str] = mapped_column(ForeignKey("mentors.id"), index=True)
    category_id: Mapped[str] = mapped_column(ForeignKey("categories.id"))


class MentorSkill(Base):
    __tablename__ = "mentor_skills"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    mentor_id: Mapped[str] = mapped_column(ForeignKey("mentors.id"), index=True)
    skill_id: Mapped[str] = mapped_column(ForeignKey("skills.id"))


class Experience(Base):
    __tablename__ = "experiences"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    mentor_id: Mapped[str] = mapped_column(ForeignKey("mentors.id"), index=True)
    company: Mapped[str] = mapped_column(String(200))
    position: Mapped[str | None] = mapped_column(String(200), default=None)
    description: Mapped[str | None] = mapped_column(Text, default=None)
    start_date: Mapped[date | None] = mapped_column(default=None)
    end_date: Mapped[date | None] = mapped_column(default=None)  # None while current
    is_current: Mapped[bool] = mapped_column(default=False)
