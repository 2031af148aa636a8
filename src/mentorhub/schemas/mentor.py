from datetime import date

from pydantic import BaseModel, Field


class CategoryRead(BaseModel):
    id: str
    name: str


class SkillRead(BaseModel):
    id: str
    name: str


class MentorBase(BaseModel):
    full_name: str
    email: str | None = None
    phone: str | None = None
    bio: str | None = None
    location: str | None = None
    profile_image_url: str | None = None
    title: str | None = None
    company: str | None = None
    years_of_experience: int = 0
    hourly_rate: int = 0
    expertise_level: str | None = None
    linkedin_url: str | None = None
    github_url: str | None = None
    portfolio_url: str | None = None
    video_intro_url: str | None = None


class MentorRead(MentorBase):
    id: str
    user_id: str | None = None
    status: str

    model_config = {"from_attributes": True}


class MentorCreate(BaseModel):
    user_id: str
    phone: str = Field(min_length=5, max_length=20)
    email: str | None = None


class MentorUpdate(BaseModel):
    full_name: str | None = None
    email: str | None = None
    phone: str | None = None
    bio: str | None = None
    location: str | None = None
    profile_image_url: str | None = None
    title: str | None = None
    company: str | None = None
    years_of_experience: int | None = Field(default=None, ge=0)
    hourly_rate: int | None = Field(default=None, ge=0)
    expertise_level: str | None = None
    linkedin_url: str | None = None
    github_url: str | None = None
    portfolio_url: str | None = None
    video_intro_url: str | None = None


class ClaimRequest(BaseModel):
    phone: str = Field(min_length=5, max_length=20)
    user_id: str


class ClaimResponse(BaseModel):
    linked: bool


class PersonalInfo(BaseModel):
    full_name: str = Field(min_length=1, max_length=200)
    email: str
    phone: str | None = None
    bio: str | None = None
    location: str | None = None
    profile_image_url: str | None = None
    linkedin: str | None = None
    github: str | None = None
    portfolio: str | None = None
    video_intro: str | None = None


class ProfessionalInfo(BaseModel):
    title: str | None = None
    company: str | None = None
    # Free-text form fields; unparseable values are stored as 0
    years_of_experience: str | int | None = None
    hourly_rate: str | int | None = None
    expertise_level: str | None = None


class ExperienceCreate(BaseModel):
    company: str = Field(min_length=1, max_length=200)
    role: str | None = None
    description: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    is_current: bool = False


class MentorApplication(BaseModel):
    user_id: str | None = None
    personal: PersonalInfo
    professional: ProfessionalInfo = ProfessionalInfo()
    categories: list[str] = []
    skills: list[str] = []
    experiences: list[ExperienceCreate] = []


class ApplicationResult(BaseModel):
    mentor_id: str
