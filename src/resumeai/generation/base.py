"""Base interfaces for the resume generation service."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from ..models import ApplicationForm, GenerationResult, ResumeDocument


@dataclass(slots=True)
class GenerationRequest:
    """Everything the service needs to draft a resume."""

    job_description: str
    background: str
    work_mode: str = ""
    target_role: str = ""
    has_experience: bool = True

    @classmethod
    def from_form(cls, form: ApplicationForm) -> "GenerationRequest":
        return cls(
            job_description=form.job_description,
            background=form.background,
            work_mode=form.work_mode,
            target_role=form.target_role,
            has_experience=form.has_experience,
        )


class GenerationService(Protocol):
    """Protocol for generation backends.

    Every method either returns a result or raises
    :class:`resumeai.exceptions.GenerationError`.
    """

    def generate_resume(self, request: GenerationRequest) -> GenerationResult:
        """Draft a full resume document."""

    def regenerate_section(self, prompt: str) -> str:
        """Return replacement text (or a JSON bullet list) for one section."""

    def generate_cover_letter(self, job_description: str, document: ResumeDocument) -> str:
        """Write a cover letter for the given resume."""
