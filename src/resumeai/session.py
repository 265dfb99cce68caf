"""Orchestrates generation, editing and rescoring of one resume."""
from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional

from .config import AppConfig
from .drafts import DraftStore
from .exceptions import GenerationError, GenerationTimeout, MalformedResponseError, ResumeAIError
from .generation import GenerationRequest, GenerationService, build_section_prompt
from .highlight import render_text
from .logger import _log_debug, _log_error, _log_info, _log_success, _log_warning
from .models import ApplicationForm, ResumeDocument
from .patch import SUMMARY_SECTION, apply_edit, apply_section_result, section_entry_index
from .scoring import AtsScorer, ScoreBreakdown

HEADING_SEPARATOR = " — "


def describe_failure(exc: BaseException) -> str:
    """Map a generation failure to the message shown to the user."""
    if isinstance(exc, GenerationTimeout):
        return f"{exc.message}. Please try again."
    if isinstance(exc, MalformedResponseError):
        return "AI returned an unexpected format. Please try again."
    if isinstance(exc, GenerationError) and exc.message.startswith("API error"):
        return f"{exc.message}. Check your connection."
    return "Something went wrong. Please try again."


class ResumeSession:
    """High level interface for one resume editing session.

    The document is replaced, never modified: every edit and every
    regenerated section produces a new snapshot which is scored again.
    """

    def __init__(
        self,
        service: GenerationService,
        config: Optional[AppConfig] = None,
        drafts: Optional[DraftStore] = None,
    ) -> None:
        self.service = service
        self.config = config or AppConfig()
        self.drafts = drafts
        self.form = (drafts.load() if drafts else None) or ApplicationForm()
        self.show_keywords = False
        self.document: Optional[ResumeDocument] = None
        self.score: Optional[ScoreBreakdown] = None
        self.gaps: List[str] = []
        self.flagged_placeholders: List[str] = []
        self.cover_letter: Optional[str] = None
        self._scorer: Optional[AtsScorer] = None
        self._pending: Dict[str, asyncio.Task] = {}
        self._generation = 0
        self._latest_request: Optional[object] = None

    @property
    def scorer(self) -> AtsScorer:
        if self._scorer is None or self._scorer.job_text != self.form.job_description:
            self._scorer = AtsScorer(self.form.job_description)
        return self._scorer

    @property
    def pending_sections(self) -> List[str]:
        return sorted(section for section, task in self._pending.items() if not task.done())

    def update_form(self, **changes: Any) -> ApplicationForm:
        """Validate and apply form changes, then save the draft."""
        data = self.form.model_dump()
        data.update(changes)
        self.form = ApplicationForm.model_validate(data)
        if self.drafts is not None:
            self.drafts.save(self.form)
        if self.document is not None:
            self.rescore()
        return self.form

    def rescore(self) -> ScoreBreakdown:
        document = self._require_document()
        self.score = self.scorer.score(document, self.form.has_experience)
        return self.score

    async def generate(self) -> Optional[ScoreBreakdown]:
        """Draft a resume from the form and score it.

        Returns None when the session was reset, or another generation was
        started, before the service answered; the answer is then dropped.
        """
        if not self.form.contact_ready:
            raise ValueError("Name and email are required")
        if not self.form.input_ready:
            raise ValueError("Describe your background before generating")
        request = GenerationRequest.from_form(self.form)
        token = self._latest_request = object()
        generation = self._generation
        _log_info(f"Generating resume for {self.form.contact.name}")
        try:
            result = await asyncio.to_thread(self.service.generate_resume, request)
        except GenerationError as exc:
            _log_error(f"Generation failed: {exc}")
            raise
        if token is not self._latest_request or generation != self._generation:
            _log_debug("Dropping resume generated for a discarded session")
            return None
        self._latest_request = None
        self._discard_pending()
        self._generation += 1
        self.document = result.resume.with_contact(self.form.contact)
        self.gaps = list(result.gaps)
        self.flagged_placeholders = list(result.flagged_placeholders)
        self.cover_letter = None
        score = self.rescore()
        _log_success(f"Resume generated, ATS score {score.overall}")
        return score

    def load_document(self, document: ResumeDocument) -> ScoreBreakdown:
        """Start editing an existing document instead of generating one."""
        self._discard_pending()
        self._generation += 1
        self.document = document
        return self.rescore()

    def edit(self, path: str, value: Any) -> ScoreBreakdown:
        """Replace one field of the document and rescore."""
        self.document = apply_edit(self._require_document(), path, value)
        return self.rescore()

    def edit_role_heading(self, index: int, heading: str) -> ScoreBreakdown:
        """Split ``"Title — Company"`` into the title and company of an entry."""
        title, _, company = heading.partition(HEADING_SEPARATOR)
        self.document = apply_edit(self._require_document(), f"experience.{index}.title", title.strip())
        return self.edit(f"experience.{index}.company", company.strip())

    def edit_education_heading(self, index: int, heading: str) -> ScoreBreakdown:
        degree, _, institution = heading.partition(HEADING_SEPARATOR)
        self.document = apply_edit(
            self._require_document(), f"education.{index}.degree", degree.strip()
        )
        return self.edit(f"education.{index}.institution", institution.strip())

    def edit_skills(self, text: str) -> ScoreBreakdown:
        """Replace the skills from a ``·`` or comma separated line."""
        skills = [skill.strip() for skill in text.replace("·", ",").split(",")]
        return self.edit("skills", [skill for skill in skills if skill])

    async def regenerate_section(self, section: str) -> bool:
        """Ask the service to rewrite one section and apply the answer.

        Returns False when the request failed, was superseded or cancelled,
        or no longer fits the document; the document is then left as it was.
        """
        document = self._require_document()
        if section != SUMMARY_SECTION and section_entry_index(section) >= len(document.experience):
            raise IndexError(f"No experience entry for section {section!r}")
        previous = self._pending.get(section)
        if previous is not None and not previous.done():
            _log_debug(f"Superseding pending regeneration of {section}")
            previous.cancel()

        prompt = build_section_prompt(
            section, self.form.job_description, document, self.form.has_experience
        )
        generation = self._generation
        task = asyncio.ensure_future(asyncio.to_thread(self.service.regenerate_section, prompt))
        self._pending[section] = task
        try:
            raw = await task
        except asyncio.CancelledError:
            if self._pending.get(section) is task:
                raise
            _log_debug(f"Regeneration of {section} cancelled")
            return False
        except GenerationError as exc:
            _log_warning(f"Keeping existing {section}: {exc}")
            return False
        finally:
            if self._pending.get(section) is task:
                del self._pending[section]

        if generation != self._generation or self.document is None:
            _log_debug(f"Dropping {section} result for a discarded document")
            return False
        try:
            self.document = apply_section_result(self.document, section, raw)
        except ResumeAIError as exc:
            _log_warning(f"Keeping existing {section}: {exc}")
            return False
        self.rescore()
        return True

    def cancel_section(self, section: str) -> bool:
        task = self._pending.pop(section, None)
        if task is None or task.done():
            return False
        task.cancel()
        return True

    async def generate_cover_letter(self) -> Optional[str]:
        document = self._require_document()
        self.cover_letter = None
        try:
            letter = await asyncio.to_thread(
                self.service.generate_cover_letter, self.form.job_description, document
            )
        except GenerationError as exc:
            _log_error(f"Cover letter failed: {exc}")
            return None
        self.cover_letter = letter
        return letter

    def render(self, text: Optional[str]) -> str:
        """Return display markup for one field of the document."""
        terms = self.score.matched_keywords if self.score else ()
        return render_text(text, terms, enabled=self.show_keywords)

    def reset(self) -> None:
        """Discard the document and the saved draft."""
        self._discard_pending()
        self._generation += 1
        self._latest_request = None
        if self.drafts is not None:
            self.drafts.clear()
        self.form = ApplicationForm()
        self.document = None
        self.score = None
        self.gaps = []
        self.flagged_placeholders = []
        self.cover_letter = None
        self.show_keywords = False
        _log_info("Session reset")

    def _discard_pending(self) -> None:
        for section in list(self._pending):
            self.cancel_section(section)

    def _require_document(self) -> ResumeDocument:
        if self.document is None:
            raise RuntimeError("No resume has been generated yet")
        return self.document
