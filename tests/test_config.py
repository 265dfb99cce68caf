from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from resumeai.config import AppConfig, GenerationSettings


def test_defaults():
    config = AppConfig()
    assert config.generation.timeout_seconds == 45.0
    assert config.generation.resume_max_tokens == 4000
    assert config.drafts.enabled is True
    assert config.drafts.path == Path("~/.resumeai/draft.json").expanduser()


def test_from_json_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        '{"generation": {"model": "claude-test", "timeout_seconds": 10}, '
        '"drafts": {"path": "' + str(tmp_path / "d.json") + '"}}',
        encoding="utf-8",
    )
    config = AppConfig.from_file(path)
    assert config.generation.model == "claude-test"
    assert config.generation.timeout_seconds == 10
    assert config.drafts.path == tmp_path / "d.json"


def test_from_yaml_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("generation:\n  section_max_tokens: 500\ndrafts:\n  enabled: false\n", encoding="utf-8")
    config = AppConfig.from_file(path)
    assert config.generation.section_max_tokens == 500
    assert config.drafts.enabled is False


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        AppConfig.from_file(tmp_path / "absent.json")


@pytest.mark.parametrize(
    "settings",
    [{"timeout_seconds": 0}, {"api_url": "ftp://example.com"}, {"resume_max_tokens": 0}],
)
def test_invalid_generation_settings(settings):
    with pytest.raises(ValidationError):
        GenerationSettings(**settings)


def test_relative_draft_path_follows_config_file(tmp_path):
    path = tmp_path / "project" / "config.yaml"
    path.parent.mkdir()
    path.write_text("drafts:\n  path: drafts/form.json\n", encoding="utf-8")
    config = AppConfig.from_file(path)
    assert config.drafts.path == tmp_path / "project" / "drafts" / "form.json"


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("", encoding="utf-8")
    assert AppConfig.from_file(path).generation.model == "claude-sonnet-4-20250514"


def test_non_mapping_config_is_rejected(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError, match="expected a mapping"):
        AppConfig.from_file(path)
