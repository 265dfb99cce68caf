from __future__ import annotations

import pytest

from resumeai.models import EducationEntry, ExperienceEntry, ResumeDocument
from resumeai.scoring import AtsScorer, flatten_resume, score_resume

RICH_POSTING = (
    "We are hiring a backend engineer to build Python services with Django, "
    "PostgreSQL, Redis, Docker and Kubernetes on AWS."
)


def make_resume(**overrides) -> ResumeDocument:
    data = dict(
        name="Alex Candidate",
        email="alex@example.com",
        summary="Backend engineer focused on Python and Django.",
        experience=[
            ExperienceEntry(
                title="Software Engineer",
                company="Acme",
                duration="2020 - 2024",
                bullets=[
                    "Built Django services backed by PostgreSQL",
                    "Led the Docker migration for [METRIC] teams",
                    "Responsible for on-call rotation",
                ],
            )
        ],
        skills=["Python", "Redis"],
        education=[EducationEntry(degree="BSc Computer Science", institution="Kubernetes University")],
        certifications=["AWS Certified Developer"],
    )
    data.update(overrides)
    return ResumeDocument(**data)


def test_flatten_includes_summary_roles_and_skills_only():
    text = flatten_resume(make_resume())
    assert text.startswith("backend engineer focused on python")
    assert "software engineer acme built django" in text
    assert text.endswith("python redis")
    assert "kubernetes" not in text
    assert "aws" not in text
    assert "2020" not in text


def test_full_breakdown_for_rich_posting():
    score = score_resume(RICH_POSTING, make_resume(), True)

    # hiring backend engineer build python services django postgresql redis
    # docker kubernetes aws -> 12 keywords, 8 found in the flattened text.
    assert score.total_keywords == 12
    assert score.matched_keywords == {
        "backend", "engineer", "python", "services", "django", "postgresql", "redis", "docker",
    }
    assert score.keyword_score == 93
    assert score.formatting_score == 92
    assert score.experience_alignment == 74
    assert score.sentence_quality == 67
    assert score.overall == 82
    assert score.verdict == "strong"
    assert score.describe() == "8 of 12 job keywords matched."


def test_keyword_score_saturates_before_full_overlap():
    posting = "alpha bravo charlie delta echo foxtrot golf"
    document = make_resume(summary="alpha bravo charlie delta echo", experience=[], skills=[])
    assert score_resume(posting, document, True).keyword_score == 100


def test_sparse_posting_gets_neutral_keyword_score():
    document = make_resume(summary="Python developer", experience=[], skills=["python"])
    score = score_resume("Python, Django, Postgres", document, True)
    assert score.total_keywords == 3
    assert score.matched_keywords == {"python"}
    assert score.keyword_score == 65
    assert score.sparse_posting
    assert "sparse" in score.describe()


def test_sparse_posting_ignores_resume_content():
    empty = score_resume("Python, Django", ResumeDocument(), True)
    full = score_resume("Python, Django", make_resume(), True)
    assert empty.keyword_score == full.keyword_score == 65


def test_placeholder_penalty_has_a_floor():
    bullets = [f"Built [Metric] thing {index}" for index in range(10)]
    document = make_resume(experience=[ExperienceEntry(title="Dev", bullets=bullets)])
    assert AtsScorer("").formatting_score(flatten_resume(document)) == 40
    assert score_resume("", document, True).formatting_score == 40


def test_placeholders_in_education_are_not_counted():
    document = make_resume(education=[EducationEntry(degree="[METRIC] credits")])
    assert score_resume("", document, True).formatting_score == 92


@pytest.mark.parametrize(
    "has_experience, overrides, expected",
    [
        (True, {"experience": []}, 0),
        (True, {"experience": [ExperienceEntry(title="Dev")]}, 50),
        (False, {"experience": [], "skills": [], "education": []}, 20),
        (False, {"experience": [], "skills": ["python"], "education": []}, 40),
        (False, {"experience": [], "skills": [], "education": [EducationEntry(degree="BA")]}, 40),
        (True, {"experience": [ExperienceEntry(bullets=["Built it"] * 9)]}, 100),
    ],
)
def test_experience_alignment(has_experience, overrides, expected):
    document = make_resume(**overrides)
    assert score_resume("", document, has_experience).experience_alignment == expected


def test_sentence_quality_uses_leading_word():
    document = make_resume(
        experience=[
            ExperienceEntry(
                bullets=["  built a thing", "Ledger reconciliation owner", "Optimized, then shipped"]
            )
        ]
    )
    assert score_resume("", document, True).sentence_quality == 67


def test_sentence_quality_without_bullets():
    assert score_resume("", make_resume(experience=[]), True).sentence_quality == 40


def test_end_to_end_sparse_posting_with_strong_bullets():
    document = ResumeDocument(
        summary="Engineer who writes python",
        experience=[
            ExperienceEntry(
                title="Engineer",
                company="Acme",
                bullets=["Built an ingestion pipeline", "Led a team of four"],
            )
        ],
    )
    score = score_resume("python django postgres", document, True)
    assert score.keyword_score == 65
    assert score.sentence_quality == 100
    assert score.experience_alignment == 66
    assert score.formatting_score == 100
    assert score.overall == 76


@pytest.mark.parametrize("job_text", ["", "   ", None, RICH_POSTING])
@pytest.mark.parametrize("has_experience", [True, False])
def test_scores_stay_in_range_on_degenerate_input(job_text, has_experience):
    for document in (ResumeDocument(), make_resume()):
        score = score_resume(job_text, document, has_experience)
        for value in (
            score.overall,
            score.keyword_score,
            score.formatting_score,
            score.experience_alignment,
            score.sentence_quality,
        ):
            assert 0 <= value <= 100


def test_scoring_is_deterministic():
    document = make_resume()
    assert score_resume(RICH_POSTING, document, True) == score_resume(RICH_POSTING, document, True)


def test_to_dict_sorts_keywords():
    payload = score_resume(RICH_POSTING, make_resume(), True).to_dict()
    assert payload["matchedKeywords"] == sorted(payload["matchedKeywords"])
    assert payload["breakdown"]["keywordScore"] == 93
