"""Score a resume document against a job posting the way an ATS filter might."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import FrozenSet, Optional

from .keywords import extract_keywords
from .models import ResumeDocument

PLACEHOLDER_MARKER = "[METRIC]"
_PLACEHOLDER_RE = re.compile(re.escape(PLACEHOLDER_MARKER), re.IGNORECASE)

ACTION_VERBS = frozenset(
    {
        "led", "built", "designed", "developed", "improved", "increased", "reduced",
        "managed", "created", "launched", "delivered", "implemented", "drove",
        "achieved", "optimized", "automated", "coordinated", "collaborated",
        "spearheaded", "established", "streamlined", "mentored", "negotiated",
        "analyzed", "produced", "deployed", "migrated", "scaled", "grew",
        "completed", "earned", "participated", "contributed", "presented",
        "researched", "supported", "initiated", "organised", "organized",
        "facilitated", "maintained", "operated",
    }
)

# Postings with this many keywords or fewer get the neutral keyword score.
SPARSE_KEYWORD_LIMIT = 5
SPARSE_KEYWORD_SCORE = 65
KEYWORD_HEADROOM_PERCENT = 140
PLACEHOLDER_PENALTY = 8
FORMATTING_FLOOR = 40
POINTS_PER_BULLET = 8
BULLET_POINTS_CAP = 50
NO_BULLETS_QUALITY = 40

# Percent weights of the composite, heaviest first.
KEYWORD_WEIGHT = 40
ALIGNMENT_WEIGHT = 30
QUALITY_WEIGHT = 20
FORMATTING_WEIGHT = 10


@dataclass(frozen=True)
class ScoreBreakdown:
    overall: int
    keyword_score: int
    formatting_score: int
    experience_alignment: int
    sentence_quality: int
    matched_keywords: FrozenSet[str]
    total_keywords: int

    @property
    def sparse_posting(self) -> bool:
        return self.total_keywords <= SPARSE_KEYWORD_LIMIT

    @property
    def verdict(self) -> str:
        if self.overall >= 80:
            return "strong"
        if self.overall >= 60:
            return "improve"
        return "work"

    def describe(self) -> str:
        """Return the one-line explanation shown next to the overall score."""
        if self.sparse_posting:
            return "Job posting was sparse, so the score is based on inferred role keywords."
        message = f"{len(self.matched_keywords)} of {self.total_keywords} job keywords matched."
        if self.overall < 80:
            message += " Address gaps below before applying."
        return message

    def to_dict(self) -> dict:
        return {
            "overall": self.overall,
            "breakdown": {
                "keywordScore": self.keyword_score,
                "formattingScore": self.formatting_score,
                "experienceAlignment": self.experience_alignment,
                "sentenceQuality": self.sentence_quality,
            },
            "matchedKeywords": sorted(self.matched_keywords),
            "totalKeywords": self.total_keywords,
        }


def flatten_resume(document: ResumeDocument) -> str:
    """Join the searchable parts of a resume into one lower-cased string.

    Education and certifications are left out on purpose.
    """
    parts = [document.summary]
    for entry in document.experience:
        parts.append(entry.title)
        parts.append(entry.company)
        parts.extend(entry.bullets)
    parts.extend(document.skills)
    return " ".join(parts).lower()


def _round_ratio(numerator: int, denominator: int) -> int:
    """Round ``numerator / denominator`` half up using integers only."""
    return (2 * numerator + denominator) // (2 * denominator)


def _leading_word(bullet: str) -> str:
    words = bullet.split(None, 1)
    if not words:
        return ""
    return words[0].lower().rstrip(".,;:!?")


class AtsScorer:
    """Scores successive versions of a resume against one job posting."""

    def __init__(self, job_text: Optional[str]) -> None:
        self.job_text = job_text or ""
        self.keywords = extract_keywords(self.job_text)

    def keyword_score(self, resume_text: str) -> tuple[int, FrozenSet[str]]:
        matched = frozenset(keyword for keyword in self.keywords if keyword in resume_text)
        total = len(self.keywords)
        if total <= SPARSE_KEYWORD_LIMIT:
            return SPARSE_KEYWORD_SCORE, matched
        return min(100, _round_ratio(len(matched) * KEYWORD_HEADROOM_PERCENT, total)), matched

    @staticmethod
    def formatting_score(resume_text: str) -> int:
        unfilled = len(_PLACEHOLDER_RE.findall(resume_text))
        return max(FORMATTING_FLOOR, 100 - PLACEHOLDER_PENALTY * unfilled)

    @staticmethod
    def experience_alignment(document: ResumeDocument, has_experience: bool) -> int:
        if has_experience:
            base = 50 if document.experience else 0
        else:
            # Projects and coursework stand in for roles, so partial credit.
            base = 40 if document.education or document.skills else 20
        bullet_count = sum(len(entry.bullets) for entry in document.experience)
        return min(100, base + min(BULLET_POINTS_CAP, POINTS_PER_BULLET * bullet_count))

    @staticmethod
    def sentence_quality(document: ResumeDocument) -> int:
        bullets = [bullet for entry in document.experience for bullet in entry.bullets]
        if not bullets:
            return NO_BULLETS_QUALITY
        good = sum(1 for bullet in bullets if _leading_word(bullet) in ACTION_VERBS)
        return _round_ratio(100 * good, len(bullets))

    def score(self, document: ResumeDocument, has_experience: bool) -> ScoreBreakdown:
        resume_text = flatten_resume(document)
        keyword_score, matched = self.keyword_score(resume_text)
        formatting = self.formatting_score(resume_text)
        alignment = self.experience_alignment(document, has_experience)
        quality = self.sentence_quality(document)
        weighted = (
            KEYWORD_WEIGHT * keyword_score
            + ALIGNMENT_WEIGHT * alignment
            + QUALITY_WEIGHT * quality
            + FORMATTING_WEIGHT * formatting
        )
        return ScoreBreakdown(
            overall=_round_ratio(weighted, 100),
            keyword_score=keyword_score,
            formatting_score=formatting,
            experience_alignment=alignment,
            sentence_quality=quality,
            matched_keywords=matched,
            total_keywords=len(self.keywords),
        )


def score_resume(
    job_text: Optional[str], document: ResumeDocument, has_experience: bool
) -> ScoreBreakdown:
    """Score ``document`` against ``job_text``; never raises for valid documents."""
    return AtsScorer(job_text).score(document, has_experience)
