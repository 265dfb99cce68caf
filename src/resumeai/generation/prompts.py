"""Prompt text sent to the generation service."""
from __future__ import annotations

from ..models import ResumeDocument
from ..patch import SUMMARY_SECTION, section_entry_index
from .base import GenerationRequest

SYSTEM_PROMPT = """You are an expert resume strategist and ATS optimization specialist. You handle every candidate type (fresh graduates with zero experience, career changers, and seasoned professionals) and every job posting type (detailed specs, vague narratives, and sparse one-liners).

RULES:
1. NEVER fabricate experience, credentials, or metrics not explicitly provided
2. DO reframe what the candidate HAS using the job posting language and keywords
3. If the job posting is vague or sparse, infer reasonable expectations from the job title, industry, and target role; do not refuse or leave gaps
4. If candidate has NO formal work experience: build around education, projects, coursework, volunteering, extracurriculars, internships, transferable skills. Never leave the experience section empty.
5. Insert [METRIC] only where a specific number would genuinely strengthen a bullet and add a plain-English description to flaggedPlaceholders
6. ATS-safe output only: no tables, no columns, no graphics
7. Inject keywords naturally, never stuff
8. Honor preferred work mode in summary if provided
9. Leave all contact fields as empty strings; they are injected after
10. Match tone and seniority to role level

CANDIDATE TYPE HANDLING:
- No experience: Lead with education. Highlight projects, coursework, clubs, volunteer work. Summary emphasizes potential and learning agility.
- Career changer: Bridge past experience to new domain. Lead with transferable skills. Use target role language throughout.
- Experienced: Lead with impact. Quantify. Seniority signals matter.

Return ONLY valid JSON, no prose and no markdown fences:
{
  "gaps": ["specific gap"],
  "flaggedPlaceholders": ["what metric to add and where"],
  "resume": {
    "name": "",
    "email": "",
    "phone": "",
    "location": "",
    "linkedin": "",
    "portfolio": "",
    "summary": "3-4 sentences tailored to candidate type and role",
    "experience": [
      {
        "title": "Job Title, Project Name, or Role",
        "company": "Company, University, or Organization",
        "duration": "Date range or Year",
        "bullets": ["Action verb + what + result or [METRIC]"]
      }
    ],
    "skills": ["skill1", "skill2"],
    "education": [{ "degree": "Degree", "institution": "School", "year": "Year" }],
    "certifications": ["cert"]
  }
}"""


def build_generation_content(request: GenerationRequest) -> str:
    return "\n\n".join(
        [
            f"JOB POSTING:\n{request.job_description or 'Not provided. Infer from target role.'}",
            f"TARGET ROLE: {request.target_role or 'Infer from job posting.'}",
            f"CANDIDATE HAS FORMAL WORK EXPERIENCE: {str(request.has_experience).lower()}",
            f"PREFERRED WORK MODE: {request.work_mode or 'Not specified'}",
            f"CANDIDATE BACKGROUND:\n{request.background}",
            "Return only valid JSON.",
        ]
    )


def build_section_prompt(
    section: str, job_description: str, document: ResumeDocument, has_experience: bool
) -> str:
    """Build the prompt that rewrites one section of ``document``."""
    context = (
        f"JOB DESCRIPTION:\n{job_description or 'Not provided. Infer from resume context.'}\n\n"
        f"CURRENT SUMMARY:\n{document.summary}\n\n"
        f"CANDIDATE HAS FORMAL WORK EXPERIENCE: {str(has_experience).lower()}"
    )
    if section == SUMMARY_SECTION:
        return (
            f"{context}\n\nRewrite ONLY the professional summary (3-4 sentences, keyword-rich, "
            "tailored to the role and candidate type). Return only the summary text, "
            "no JSON and no labels."
        )
    entry = document.experience[section_entry_index(section)]
    bullets = "\n".join(entry.bullets)
    return (
        f"{context}\n\nROLE: {entry.title} at {entry.company}\nCURRENT BULLETS:\n{bullets}\n\n"
        "Rewrite ONLY the bullet points for this role (3-5 bullets, strong action verbs, "
        'keywords from JD). Return a JSON array of strings only, e.g. ["Bullet one","Bullet two"].'
    )


def build_cover_letter_prompt(job_description: str, document: ResumeDocument) -> str:
    experience = "\n".join(
        f"{entry.title} at {entry.company}: {'; '.join(entry.bullets[:2])}"
        for entry in document.experience
    )
    return (
        "Write a compelling, concise cover letter for this candidate.\n\n"
        f"CANDIDATE: {document.name or 'Candidate'}\n"
        f"JOB:\n{job_description or 'Not provided. Write based on resume context.'}\n"
        f"SUMMARY: {document.summary}\n"
        f"KEY EXPERIENCE:\n{experience}\n\n"
        "INSTRUCTIONS: 3 tight paragraphs (hook, fit, close). Use job language. "
        "No address blocks or date lines. Max 250 words."
    )
