"""ATS-style resume scoring, safe highlighting and editing."""

from .config import AppConfig
from .highlight import escape_for_literal_match, render_text, render_with_highlights, sanitize_markup
from .keywords import extract_keywords
from .models import ApplicationForm, ContactDetails, EducationEntry, ExperienceEntry, ResumeDocument
from .patch import apply_edit
from .scoring import ScoreBreakdown, flatten_resume, score_resume
from .session import ResumeSession

__all__ = [
    "AppConfig",
    "ApplicationForm",
    "ContactDetails",
    "EducationEntry",
    "ExperienceEntry",
    "ResumeDocument",
    "ResumeSession",
    "ScoreBreakdown",
    "apply_edit",
    "escape_for_literal_match",
    "extract_keywords",
    "flatten_resume",
    "render_text",
    "render_with_highlights",
    "sanitize_markup",
    "score_resume",
]
