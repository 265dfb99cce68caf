"""Local cache of the in-progress application form."""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol

from pydantic import ValidationError

from .logger import _log_debug, _log_warning
from .models import ApplicationForm


class DraftStore(Protocol):
    """Protocol for draft storage backends."""

    def load(self) -> Optional[ApplicationForm]:
        """Return the saved form, or None when there is no usable draft."""

    def save(self, form: ApplicationForm) -> None:
        """Persist ``form``, replacing any previous draft."""

    def clear(self) -> None:
        """Forget the saved draft."""


class JsonFileDraftStore:
    """Keep the draft as a JSON file on disk."""

    def __init__(self, path: Path) -> None:
        self.path = path.expanduser()

    def load(self) -> Optional[ApplicationForm]:
        if not self.path.exists():
            return None
        try:
            return ApplicationForm.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, ValidationError) as exc:
            _log_warning(f"Ignoring unreadable draft {self.path}: {exc}")
            return None

    def save(self, form: ApplicationForm) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(form.model_dump_json(indent=2), encoding="utf-8")
        _log_debug(f"Draft saved to {self.path}")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
