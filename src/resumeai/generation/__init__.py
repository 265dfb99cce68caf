"""Generation service implementations."""

from .anthropic import AnthropicGenerationService
from .base import GenerationRequest, GenerationService
from .prompts import build_section_prompt

__all__ = [
    "AnthropicGenerationService",
    "GenerationRequest",
    "GenerationService",
    "build_section_prompt",
]
