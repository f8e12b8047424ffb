"""Tests for sessionplanner.config — Config dataclass and load_config()."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from sessionplanner.config import Config, load_config
from sessionplanner.workflow import ONLINE_LOCATION, PartialFailurePolicy


class TestConfig:
    def test_defaults(self):
        cfg = Config()
        assert cfg.store_path.name == "store.json"
        assert cfg.save_failure_policy is PartialFailurePolicy.CONTINUE
        assert cfg.invite_failure_policy is PartialFailurePolicy.ABORT
        assert cfg.webhook_timeout is None
        assert cfg.online_location == ONLINE_LOCATION


class TestLoadConfig:
    def test_missing_default_uses_defaults(self):
        with patch.object(Path, "exists", return_value=False):
            cfg = load_config(None)
        assert cfg == Config()

    def test_explicit_path_not_found(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nonexistent.yaml")

    def test_empty_file_uses_defaults(self, tmp_path):
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text("")
        assert load_config(cfg_file) == Config()

    def test_full_yaml(self, tmp_path):
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text(
            "store_path: /data/store.json\n"
            "save_failure_policy: abort\n"
            "invite_failure_policy: CONTINUE\n"
            "webhook_timeout: 7.5\n"
            "online_location: Online (Teams)\n"
        )
        cfg = load_config(cfg_file)
        assert cfg.store_path == Path("/data/store.json")
        assert cfg.save_failure_policy is PartialFailurePolicy.ABORT
        assert cfg.invite_failure_policy is PartialFailurePolicy.CONTINUE
        assert cfg.webhook_timeout == 7.5
        assert cfg.online_location == "Online (Teams)"

    def test_store_path_expanduser(self, tmp_path):
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text("store_path: ~/store.json\n")
        assert "~" not in str(load_config(cfg_file).store_path)

    def test_yaml_returns_non_dict(self, tmp_path):
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text("- item1\n- item2\n")
        with pytest.raises(ValueError, match="Invalid config"):
            load_config(cfg_file)

    def test_unknown_policy(self, tmp_path):
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text("save_failure_policy: retry\n")
        with pytest.raises(ValueError, match="save_failure_policy"):
            load_config(cfg_file)

    def test_bad_timeout(self, tmp_path):
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text("webhook_timeout: soon\n")
        with pytest.raises(ValueError, match="webhook_timeout"):
            load_config(cfg_file)

    def test_null_timeout(self, tmp_path):
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text("webhook_timeout: null\n")
        assert load_config(cfg_file).webhook_timeout is None
