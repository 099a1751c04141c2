"""Tests for config loading."""

import pytest

from blog_fact_checker.config import AppConfig, CredentialsConfig, LLMConfig, load_config


class TestConfig:
    def test_defaults(self):
        config = AppConfig()
        assert config.webflow.api_base == "https://api.webflow.com/v2"
        assert config.webflow.content_field == "post-body"
        assert config.llm.model == "claude-sonnet-4-5-20250929"
        assert config.editor.preview_length == 200

    def test_load_config_defaults(self, tmp_path):
        """Loading from non-existent path returns defaults."""
        config = load_config(tmp_path / "nonexistent.yaml")
        assert config.webflow.timeout == 30

    def test_load_config_from_yaml(self, tmp_path):
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text(
            "webflow:\n  content_field: body\nllm:\n  model: test-model\n"
        )
        config = load_config(yaml_path)
        assert config.webflow.content_field == "body"
        assert config.llm.model == "test-model"
        # Defaults for unspecified
        assert config.editor.output_dir == "./output"

    def test_empty_yaml(self, tmp_path):
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text("")
        assert load_config(yaml_path) == AppConfig()

    def test_finds_config_in_cwd(self, tmp_path, monkeypatch):
        (tmp_path / "config.yaml").write_text("editor:\n  preview_length: 50\n")
        monkeypatch.chdir(tmp_path)
        assert load_config().editor.preview_length == 50

    def test_credentials_resolved_path(self):
        creds = CredentialsConfig(db_path="~/test.db")
        assert "~" not in str(creds.resolved_db_path)

    def test_frozen_config(self):
        config = LLMConfig()
        with pytest.raises(AttributeError):
            config.model = "changed"
