from __future__ import annotations

import re

from resumeai.export import (
    EMPTY_NOTICE,
    build_cover_letter_document,
    build_print_document,
    render_resume_html,
)
from resumeai.highlight import KEYWORD_MARK_STYLE, PLACEHOLDER_MARK_STYLE
from resumeai.models import EducationEntry, ExperienceEntry, ResumeDocument
from resumeai.scoring import score_resume

JOB = "Python developer with Django, Docker, Kubernetes, Terraform and AWS"


def make_document() -> ResumeDocument:
    return ResumeDocument(
        name="Alex <b>Candidate</b>",
        email="alex@example.com",
        location="Lagos",
        summary="Python developer shipping Django apps.",
        experience=[
            ExperienceEntry(
                title="Engineer",
                company="Acme",
                duration="2021 - 2024",
                bullets=['Built Docker images<script>alert("x")</script>', "Cut costs by [METRIC]"],
            ),
            ExperienceEntry(title="Volunteer", company="Club"),
        ],
        skills=["Python", "Django"],
        education=[EducationEntry(degree="BSc", institution="Uni", year="2020")],
        certifications=["AWS Practitioner"],
    )


def tags(markup: str) -> set[str]:
    return {name.lower() for name in re.findall(r"<\s*/?\s*([a-zA-Z][a-zA-Z0-9]*)", markup)}


def test_resume_html_escapes_model_text_and_marks_placeholders():
    document = make_document()
    score = score_resume(JOB, document, True)
    markup = render_resume_html(document, score, show_keywords=True)

    assert "<script>" not in markup
    assert "&lt;script&gt;" in markup
    assert "&lt;b&gt;Candidate&lt;/b&gt;" in markup
    assert f'<mark style="{PLACEHOLDER_MARK_STYLE}">[METRIC]</mark>' in markup
    assert f'<mark style="{KEYWORD_MARK_STYLE}">Docker</mark>' in markup
    assert "<li>No bullets yet.</li>" in markup
    assert "Python · Django" in markup.replace(f'<mark style="{KEYWORD_MARK_STYLE}">', "").replace("</mark>", "")
    assert tags(markup) <= {"h1", "div", "span", "p", "ul", "li", "mark"}


def test_section_label_follows_candidate_type():
    document = make_document()
    assert ">Experience<" in render_resume_html(document, has_experience=True)
    assert "Projects &amp; Experience" in render_resume_html(document, has_experience=False)


def test_empty_document_renders_notice():
    assert render_resume_html(ResumeDocument(name="Alex")) == EMPTY_NOTICE


def test_print_document_drops_keyword_marks_only():
    document = make_document()
    score = score_resume(JOB, document, True)
    page = build_print_document(document, score, show_keywords=True)

    assert page.startswith("<html><head><title>Resume — Alex &lt;b&gt;Candidate&lt;/b&gt;</title>")
    assert KEYWORD_MARK_STYLE not in page
    assert f'<mark style="{PLACEHOLDER_MARK_STYLE}">[METRIC]</mark>' in page


def test_cover_letter_paragraphs_are_escaped():
    page = build_cover_letter_document("Dear team,\n\nI <3 Python.\n\n", name="Alex")
    assert "<title>Cover Letter — Alex</title>" in page
    assert "<p>Dear team,</p><p>I &lt;3 Python.</p>" in page
    assert "<title>Cover Letter</title>" in build_cover_letter_document("Hi")
