"""Resume document and application form models."""
from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

WORK_MODES = ("Remote", "Hybrid", "On-site", "Open to all")
CONTACT_FIELDS = ("name", "email", "phone", "location", "linkedin", "portfolio")


class ExperienceEntry(BaseModel):
    """A role, project or activity with its ordered bullet points."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    company: str = ""
    duration: str = ""
    bullets: List[str] = Field(default_factory=list)


class EducationEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    degree: str = ""
    institution: str = ""
    year: str = ""


class ResumeDocument(BaseModel):
    """Snapshot of a structured resume.

    Snapshots are never changed in place; edits go through
    :func:`resumeai.patch.apply_edit`, which returns a new snapshot.
    Freezing only blocks attribute assignment, so the list fields must be
    treated as read-only by callers.
    """

    model_config = ConfigDict(frozen=True)

    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    portfolio: str = ""
    summary: str = ""
    experience: List[ExperienceEntry] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    education: List[EducationEntry] = Field(default_factory=list)
    certifications: List[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.summary and not self.experience and not self.skills

    def with_contact(self, contact: "ContactDetails") -> "ResumeDocument":
        """Return a copy whose contact fields come from the user, not the model."""
        return self.model_copy(update=contact.model_dump(), deep=True)


class ContactDetails(BaseModel):
    """Contact fields typed in by the user."""

    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    portfolio: str = ""


class ApplicationForm(BaseModel):
    """In-progress form state, persisted as a draft between runs."""

    contact: ContactDetails = Field(default_factory=ContactDetails)
    work_mode: str = ""
    target_role: str = ""
    has_experience: bool = True
    job_description: str = ""
    background: str = Field("", description="Free-form description of the candidate's history")

    @field_validator("work_mode")
    @classmethod
    def _check_work_mode(cls, value: str) -> str:
        if value and value not in WORK_MODES:
            raise ValueError(f"work_mode must be one of {', '.join(WORK_MODES)}")
        return value

    @property
    def contact_ready(self) -> bool:
        return bool(self.contact.name.strip() and self.contact.email.strip())

    @property
    def input_ready(self) -> bool:
        return len(self.background.strip()) > 10


class GenerationResult(BaseModel):
    """Structured output of a full resume generation call."""

    model_config = ConfigDict(populate_by_name=True)

    gaps: List[str] = Field(default_factory=list)
    flagged_placeholders: List[str] = Field(default_factory=list, alias="flaggedPlaceholders")
    resume: ResumeDocument = Field(default_factory=ResumeDocument)
