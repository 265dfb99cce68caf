"""Build printable HTML for the resume and the cover letter."""
from __future__ import annotations

import html
from pathlib import Path
from typing import Iterable, List, Optional

from .highlight import render_text, strip_keyword_marks
from .logger import _log_info
from .models import ResumeDocument
from .scoring import ScoreBreakdown

PRINT_CSS = """
  *{margin:0;padding:0;box-sizing:border-box}
  body{font-family:'Georgia',serif;color:#111;padding:.65in .8in;max-width:8.5in;font-size:10.5pt}
  h1{font-size:22pt;font-weight:700;letter-spacing:-.5px;margin-bottom:4px}
  .rc{font-size:10pt;color:#555;display:flex;flex-wrap:wrap;gap:3px 16px;margin-bottom:16px}
  .rs{font-size:8pt;font-weight:700;letter-spacing:.18em;text-transform:uppercase;border-bottom:1.5px solid #ccc;padding-bottom:3px;margin:14px 0 9px}
  .rjh{display:flex;justify-content:space-between;align-items:baseline;flex-wrap:wrap;gap:2px;margin-bottom:4px}
  .rjt{font-weight:700;font-size:11pt}
  .rjm{font-size:9.5pt;color:#666}
  ul{padding-left:16px;margin-top:4px}
  li{font-size:10.5pt;line-height:1.65;margin-bottom:2px}
  .rsk{font-size:10.5pt;line-height:1.8}
  .red{display:flex;justify-content:space-between;font-size:10.5pt;margin-bottom:4px}
  mark{background:#fff3cd;padding:0 2px;border-radius:2px}
  @media print{body{padding:.5in .65in}}
"""

COVER_LETTER_CSS = (
    "body{font-family:Georgia,serif;font-size:11pt;color:#111;padding:.75in;"
    "max-width:8.5in;line-height:1.9}p{margin-bottom:1em}@media print{body{padding:.5in}}"
)

EMPTY_NOTICE = '<p class="empty">Resume content will appear here after generation.</p>'


def _title(prefix: str, name: str) -> str:
    return html.escape(f"{prefix} — {name}" if name else prefix)


def _section(label: str) -> str:
    return f'<div class="rs">{html.escape(label)}</div>'


def render_resume_html(
    document: ResumeDocument,
    score: Optional[ScoreBreakdown] = None,
    show_keywords: bool = False,
    has_experience: bool = True,
) -> str:
    """Render the resume body; every free-text field goes through the sanitiser."""
    if document.is_empty:
        return EMPTY_NOTICE

    terms: Iterable[str] = score.matched_keywords if score else ()

    def text(value: str) -> str:
        return render_text(value, terms, enabled=show_keywords)

    parts: List[str] = []
    if document.name:
        parts.append(f"<h1>{text(document.name)}</h1>")
    contact = [
        value
        for value in (
            document.email,
            document.phone,
            document.location,
            document.linkedin,
            document.portfolio,
        )
        if value
    ]
    if contact:
        items = "".join(f"<span>{text(value)}</span>" for value in contact)
        parts.append(f'<div class="rc">{items}</div>')
    if document.summary:
        parts.append(_section("Professional Summary"))
        parts.append(f'<p class="summary">{text(document.summary)}</p>')
    if document.experience:
        parts.append(_section("Experience" if has_experience else "Projects & Experience"))
        for entry in document.experience:
            heading = text(entry.title)
            if entry.company:
                heading += f" — {text(entry.company)}"
            parts.append(
                f'<div class="rjh"><span class="rjt">{heading}</span>'
                f'<span class="rjm">{text(entry.duration)}</span></div>'
            )
            bullets = "".join(f"<li>{text(bullet)}</li>" for bullet in entry.bullets)
            parts.append(f"<ul>{bullets or '<li>No bullets yet.</li>'}</ul>")
    if document.skills:
        parts.append(_section("Skills"))
        parts.append(f'<div class="rsk">{text(" · ".join(document.skills))}</div>')
    if document.education:
        parts.append(_section("Education"))
        for entry in document.education:
            heading = text(entry.degree)
            if entry.institution:
                heading += f" — {text(entry.institution)}"
            parts.append(f'<div class="red"><span>{heading}</span><span>{text(entry.year)}</span></div>')
    if document.certifications:
        parts.append(_section("Certifications"))
        parts.extend(f'<div class="cert">{text(cert)}</div>' for cert in document.certifications)
    return "\n".join(parts)


def build_print_document(
    document: ResumeDocument,
    score: Optional[ScoreBreakdown] = None,
    has_experience: bool = True,
    show_keywords: bool = False,
) -> str:
    """Return a standalone HTML page for printing or PDF export.

    Keyword highlights are screen-only; placeholder marks are kept.
    """
    body = render_resume_html(document, score, show_keywords, has_experience)
    body = strip_keyword_marks(body)
    return (
        f"<html><head><title>{_title('Resume', document.name)}</title>"
        f"<style>{PRINT_CSS}</style></head><body>{body}</body></html>"
    )


def build_cover_letter_document(text: str, name: str = "") -> str:
    paragraphs = "".join(
        f"<p>{html.escape(paragraph)}</p>" for paragraph in (text or "").split("\n\n") if paragraph
    )
    return (
        f"<html><head><title>{_title('Cover Letter', name)}</title>"
        f"<style>{COVER_LETTER_CSS}</style></head><body>{paragraphs}</body></html>"
    )


async def write_pdf(document_html: str, path: Path) -> Path:
    """Print ``document_html`` to a PDF file with headless Chromium."""
    async_playwright = _require_playwright()
    path.parent.mkdir(parents=True, exist_ok=True)
    async with async_playwright() as playwright:
        browser = await playwright.chromium.launch(headless=True)
        try:
            page = await browser.new_page()
            await page.set_content(document_html, wait_until="domcontentloaded")
            await page.pdf(path=str(path), format="Letter", print_background=True)
        finally:
            await browser.close()
    _log_info(f"PDF written to {path}")
    return path


def _require_playwright():
    try:
        from playwright.async_api import async_playwright
    except ImportError as exc:  # pragma: no cover - optional dependency
        raise RuntimeError(
            "Playwright is required for PDF export. Install with 'pip install resumeai[playwright]'"
        ) from exc
    return async_playwright
