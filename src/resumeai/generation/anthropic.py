"""Generation service backed by the Anthropic Messages API."""
from __future__ import annotations

import json
import os
from typing import List, Optional

import requests
from pydantic import ValidationError

from ..config import GenerationSettings
from ..exceptions import GenerationError, GenerationTimeout, MalformedResponseError
from ..logger import _log_debug, _log_warning
from ..models import GenerationResult, ResumeDocument
from ..patch import strip_code_fences
from .base import GenerationRequest
from .prompts import (
    SYSTEM_PROMPT,
    build_cover_letter_prompt,
    build_generation_content,
)


class AnthropicGenerationService:
    """Call the hosted model over HTTP and validate what comes back."""

    name = "anthropic"

    def __init__(
        self,
        settings: Optional[GenerationSettings] = None,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.settings = settings or GenerationSettings()
        self._api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        self._session = session or requests.Session()

    def generate_resume(self, request: GenerationRequest) -> GenerationResult:  # noqa: D401
        """Return a validated resume draft for ``request``."""
        text = self._complete(
            [{"role": "user", "content": build_generation_content(request)}],
            max_tokens=self.settings.resume_max_tokens,
            system=SYSTEM_PROMPT,
        )
        clean = strip_code_fences(text)
        try:
            payload = json.loads(clean)
        except json.JSONDecodeError as exc:
            raise MalformedResponseError("Model returned an unexpected format", raw=text) from exc
        try:
            return GenerationResult.model_validate(payload)
        except ValidationError as exc:
            raise MalformedResponseError(f"Model output failed validation: {exc}", raw=text) from exc

    def regenerate_section(self, prompt: str) -> str:
        return self._complete(
            [{"role": "user", "content": prompt}], max_tokens=self.settings.section_max_tokens
        )

    def generate_cover_letter(self, job_description: str, document: ResumeDocument) -> str:
        prompt = build_cover_letter_prompt(job_description, document)
        return self._complete(
            [{"role": "user", "content": prompt}], max_tokens=self.settings.cover_letter_max_tokens
        )

    def _headers(self) -> dict:
        headers = {
            "content-type": "application/json",
            "anthropic-version": self.settings.api_version,
        }
        if self._api_key:
            headers["x-api-key"] = self._api_key
        return headers

    def _complete(self, messages: List[dict], max_tokens: int, system: Optional[str] = None) -> str:
        body = {"model": self.settings.model, "max_tokens": max_tokens, "messages": messages}
        if system:
            body["system"] = system
        _log_debug(f"POST {self.settings.api_url} model={self.settings.model} max_tokens={max_tokens}")
        try:
            response = self._session.post(
                self.settings.api_url,
                json=body,
                headers=self._headers(),
                timeout=self.settings.timeout_seconds,
            )
        except requests.Timeout as exc:
            raise GenerationTimeout(
                f"Request timed out after {self.settings.timeout_seconds:g}s"
            ) from exc
        except requests.RequestException as exc:
            raise GenerationError(f"API request failed: {exc}") from exc

        if not response.ok:
            message = self._error_message(response) or f"API error {response.status_code}"
            _log_warning(f"Generation call failed: {message}")
            raise GenerationError(message, status_code=response.status_code)
        try:
            data = response.json()
        except ValueError as exc:
            raise MalformedResponseError("API returned a non-JSON body", raw=response.text) from exc
        if not isinstance(data, dict):
            raise MalformedResponseError("API returned an unexpected body", raw=response.text)
        error = data.get("error")
        if error:
            message = error.get("message") if isinstance(error, dict) else error
            if not isinstance(message, str) or not message:
                message = "API error"
            raise GenerationError(message)
        content = data.get("content") or []
        if not isinstance(content, list):
            raise MalformedResponseError("API returned an unexpected body", raw=response.text)
        if not content:
            return ""
        block = content[0]
        text = block.get("text") if isinstance(block, dict) else None
        if not isinstance(block, dict) or (text is not None and not isinstance(text, str)):
            raise MalformedResponseError("API returned an unexpected body", raw=response.text)
        return (text or "").strip()

    @staticmethod
    def _error_message(response: requests.Response) -> Optional[str]:
        try:
            payload = response.json()
        except ValueError:
            return None
        error = payload.get("error") if isinstance(payload, dict) else None
        if isinstance(error, dict):
            return error.get("message")
        return None
