"""Command line interface for scoring, rendering and generating resumes."""
from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv
from pydantic import ValidationError

from .config import AppConfig
from .drafts import JsonFileDraftStore
from .exceptions import GenerationError
from .export import build_print_document, write_pdf
from .generation import AnthropicGenerationService
from .logger import _log_error, setup_logger
from .models import WORK_MODES, ContactDetails, ResumeDocument
from .scoring import ScoreBreakdown, score_resume
from .session import ResumeSession, describe_failure


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Score and build ATS-friendly resumes")
    parser.add_argument("--config", type=Path, default=None, help="Path to a JSON or YAML config")
    parser.add_argument("--log-dir", type=Path, default=None, help="Directory for the log file")
    commands = parser.add_subparsers(dest="command", required=True)

    score = commands.add_parser("score", help="Score a resume JSON file against a job posting")
    score.add_argument("job", type=Path, help="Text file holding the job posting")
    score.add_argument("resume", type=Path, help="Resume document as JSON")
    score.add_argument("--no-experience", action="store_true", help="Candidate has no formal work experience")
    score.add_argument("--json", action="store_true", help="Print the breakdown as JSON")

    render = commands.add_parser("render", help="Export a resume JSON file as printable HTML")
    render.add_argument("job", type=Path, help="Text file holding the job posting")
    render.add_argument("resume", type=Path, help="Resume document as JSON")
    render.add_argument("--out", type=Path, required=True, help="HTML file to write")
    render.add_argument("--pdf", type=Path, default=None, help="Also print to this PDF file")
    render.add_argument("--no-experience", action="store_true")

    generate = commands.add_parser("generate", help="Draft a resume with the hosted model")
    generate.add_argument("--job", type=Path, default=None, help="Text file holding the job posting")
    generate.add_argument("--background", type=Path, default=None, help="Text file describing the candidate")
    generate.add_argument("--name", default=None)
    generate.add_argument("--email", default=None)
    generate.add_argument("--work-mode", choices=WORK_MODES, default=None)
    generate.add_argument("--target-role", default=None)
    generate.add_argument("--no-experience", action="store_true")
    generate.add_argument("--out", type=Path, default=None, help="Write the resume JSON here")

    commands.add_parser("reset", help="Delete the saved form draft")
    return parser.parse_args(argv)


def load_config(path: Optional[Path]) -> AppConfig:
    return AppConfig.from_file(path) if path else AppConfig()


def load_resume(path: Path) -> ResumeDocument:
    return ResumeDocument.model_validate_json(path.read_text(encoding="utf-8"))


def print_score(score: ScoreBreakdown) -> None:
    print(f"ATS score: {score.overall}/100 ({score.verdict})")
    print(f"  Keywords: {score.keyword_score}")
    print(f"  Depth:    {score.experience_alignment}")
    print(f"  Quality:  {score.sentence_quality}")
    print(f"  Format:   {score.formatting_score}")
    print(score.describe())


def run_score(args: argparse.Namespace) -> int:
    job_text = args.job.read_text(encoding="utf-8")
    score = score_resume(job_text, load_resume(args.resume), not args.no_experience)
    if args.json:
        print(json.dumps(score.to_dict(), indent=2))
    else:
        print_score(score)
    return 0


def run_render(args: argparse.Namespace) -> int:
    job_text = args.job.read_text(encoding="utf-8")
    document = load_resume(args.resume)
    has_experience = not args.no_experience
    score = score_resume(job_text, document, has_experience)
    page = build_print_document(document, score, has_experience)
    args.out.write_text(page, encoding="utf-8")
    print(f"Wrote {args.out}")
    if args.pdf:
        asyncio.run(write_pdf(page, args.pdf))
        print(f"Wrote {args.pdf}")
    return 0


def run_generate(args: argparse.Namespace, config: AppConfig) -> int:
    drafts = JsonFileDraftStore(config.drafts.path) if config.drafts.enabled else None
    service = AnthropicGenerationService(config.generation)
    session = ResumeSession(service, config=config, drafts=drafts)

    changes: dict = {}
    contact = session.form.contact.model_dump()
    if args.name is not None:
        contact["name"] = args.name
    if args.email is not None:
        contact["email"] = args.email
    changes["contact"] = ContactDetails.model_validate(contact)
    if args.job is not None:
        changes["job_description"] = args.job.read_text(encoding="utf-8")
    if args.background is not None:
        changes["background"] = args.background.read_text(encoding="utf-8")
    if args.work_mode is not None:
        changes["work_mode"] = args.work_mode
    if args.target_role is not None:
        changes["target_role"] = args.target_role
    if args.no_experience:
        changes["has_experience"] = False
    session.update_form(**changes)

    try:
        score = asyncio.run(session.generate())
    except ValueError as exc:
        print(f"Cannot generate yet: {exc}")
        return 2
    except GenerationError as exc:
        print(describe_failure(exc))
        return 1

    if score is None or session.document is None:
        print("Generation was discarded.")
        return 1
    output = session.document.model_dump_json(indent=2)
    if args.out:
        args.out.write_text(output, encoding="utf-8")
        print(f"Wrote {args.out}")
    else:
        print(output)
    print_score(score)
    for gap in session.gaps:
        print(f"✕ {gap}")
    for placeholder in session.flagged_placeholders:
        print(f"⚠ {placeholder}")
    return 0


def run_reset(config: AppConfig) -> int:
    JsonFileDraftStore(config.drafts.path).clear()
    print("Draft cleared.")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv()
    args = parse_args(argv)
    try:
        config = load_config(args.config)
    except (OSError, ValueError, ValidationError) as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2
    setup_logger(args.log_dir or config.log_dir, console_level="WARNING")

    try:
        if args.command == "score":
            return run_score(args)
        if args.command == "render":
            return run_render(args)
        if args.command == "generate":
            return run_generate(args, config)
        return run_reset(config)
    except (OSError, ValidationError) as exc:
        _log_error(str(exc))
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
