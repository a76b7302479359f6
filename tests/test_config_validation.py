"""Tests for config validation."""

import pytest

from resume_refiner.config import load_config


class TestConfigValidation:
    @pytest.mark.parametrize(
        ("yaml_text", "field"),
        [
            ("llm:\n  max_attempts: 0\n", "max_attempts"),
            ("llm:\n  max_attempts: 99\n", "max_attempts"),
            ("llm:\n  backoff_seconds: -1\n", "backoff_seconds"),
            ("llm:\n  timeout: 0\n", "timeout"),
            ("llm:\n  fatal_policy: retry_forever\n", "fatal_policy"),
            ("parser:\n  tags: ['SUMMARY', 'BAD TAG']\n", "tags"),
            ("parser:\n  entry_sentinel: ''\n", "entry_sentinel"),
            ("document:\n  heading_size: 0\n", "heading_size"),
        ],
    )
    def test_invalid_values(self, tmp_path, yaml_text, field):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text(yaml_text)
        with pytest.raises(ValueError, match=field):
            load_config(yaml)

    def test_unknown_key_rejected(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("llm:\n  haiku_model: x\n")
        with pytest.raises(TypeError):
            load_config(yaml)
