"""Apply single-field edits to resume snapshots."""
from __future__ import annotations

import json
import re
from typing import Any, List

from pydantic import BaseModel

from .exceptions import MalformedResponseError, PatchPathError
from .models import ResumeDocument

SUMMARY_SECTION = "summary"
BULLETS_SECTION_PREFIX = "bullets-"

_FENCE_RE = re.compile(r"```(?:json)?")
_INDEX_RE = re.compile(r"[0-9]+")


def parse_path(path: str) -> List[str]:
    """Split a dotted path such as ``experience.0.bullets.1`` into segments."""
    segments = path.split(".")
    if not path or any(not segment for segment in segments):
        raise PatchPathError(path, path, "empty segment")
    return segments


def _step(container: Any, segment: str, path: str) -> Any:
    if isinstance(container, dict):
        if segment not in container:
            raise PatchPathError(path, segment, "no such field")
        return segment
    if isinstance(container, list):
        if not _INDEX_RE.fullmatch(segment):
            raise PatchPathError(path, segment, "expected a list index")
        index = int(segment)
        if index >= len(container):
            raise PatchPathError(path, segment, f"index out of range (length {len(container)})")
        return index
    raise PatchPathError(path, segment, f"cannot descend into {type(container).__name__}")


def apply_edit(document: ResumeDocument, path: str, value: Any) -> ResumeDocument:
    """Return a new snapshot with the field at ``path`` replaced by ``value``.

    The input snapshot is left untouched. Every segment, the last one
    included, must already exist: paths come from the editor, so a bad one
    is a bug and raises :class:`PatchPathError`. A value of the wrong type
    fails model validation.
    """
    segments = parse_path(path)
    data = document.model_dump()
    container: Any = data
    for segment in segments[:-1]:
        container = container[_step(container, segment, path)]
    if isinstance(value, BaseModel):
        value = value.model_dump()
    container[_step(container, segments[-1], path)] = value
    return ResumeDocument.model_validate(data)


def bullets_section(index: int) -> str:
    return f"{BULLETS_SECTION_PREFIX}{index}"


def section_entry_index(section: str) -> int:
    """Return the experience index addressed by a ``bullets-<n>`` section."""
    suffix = section[len(BULLETS_SECTION_PREFIX) :]
    if not section.startswith(BULLETS_SECTION_PREFIX) or not _INDEX_RE.fullmatch(suffix):
        raise PatchPathError(section, section, "unknown section")
    return int(suffix)


def strip_code_fences(raw: str) -> str:
    return _FENCE_RE.sub("", raw).strip()


def parse_bullet_list(raw: str) -> List[str]:
    """Parse a JSON array of bullet strings returned by the service."""
    try:
        bullets = json.loads(strip_code_fences(raw))
    except json.JSONDecodeError as exc:
        raise MalformedResponseError("Bullet regeneration did not return JSON", raw=raw) from exc
    if not isinstance(bullets, list) or not all(isinstance(item, str) for item in bullets):
        raise MalformedResponseError("Bullet regeneration must return a list of strings", raw=raw)
    return bullets


def apply_section_result(document: ResumeDocument, section: str, raw: str) -> ResumeDocument:
    """Apply the text returned for a regenerated section."""
    if section == SUMMARY_SECTION:
        return apply_edit(document, "summary", raw.strip())
    index = section_entry_index(section)
    return apply_edit(document, f"experience.{index}.bullets", parse_bullet_list(raw))
