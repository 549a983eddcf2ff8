from pathlib import Path

import pytest

from walkathon.config import Config, apply_environment, load_config, resolve_config_paths
from walkathon.errors import ConfigError

CONFIG_YAML = """\
name: Sangamam Walkathon 2025
feed_url: https://sheets.example.com/export?format=csv
storage_dir: data
export_dir: /tmp/walkathon-exports
event:
  name: Sangamam Walkathon
  date: Saturday, August 16, 2025
organizer_contacts:
  - "Organizer One: (408) 555-0001"
"""


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "walkathon.yaml"
    path.write_text(CONFIG_YAML, encoding="utf-8")
    return path


class TestLoadConfig:
    def test_defaults_without_file(self):
        config = load_config(environ={})

        assert config.feed_url is None
        assert config.min_payload_bytes == 50
        assert config.supabase_table == "participants"
        assert not config.remote_configured
        assert not config.email_configured

    def test_yaml_file(self, config_file, tmp_path):
        config = load_config(config_file, environ={})

        assert config.name == "Sangamam Walkathon 2025"
        assert config.event.date == "Saturday, August 16, 2025"
        assert config.storage_dir == (tmp_path / "data").resolve()
        assert config.export_dir == Path("/tmp/walkathon-exports")
        assert config.organizer_contacts == ["Organizer One: (408) 555-0001"]

    def test_environment_overrides_file(self, config_file):
        environ = {
            "WALKATHON_FEED_URL": "https://other.example.com/feed.csv",
            "SUPABASE_URL": "https://project.supabase.co",
            "SUPABASE_ANON_KEY": "anon",
            "EMAILJS_SERVICE_ID": "",
        }
        config = load_config(config_file, environ=environ)

        assert config.feed_url == "https://other.example.com/feed.csv"
        assert config.remote_configured
        assert config.emailjs_service_id is None

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("name: [unclosed", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(path, environ={})

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="must be a mapping"):
            load_config(path, environ={})

    def test_validation_error(self, tmp_path):
        path = tmp_path / "typo.yaml"
        path.write_text("min_payload_bytes: lots\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid config"):
            load_config(path, environ={})


class TestHelpers:
    def test_resolve_config_paths_leaves_absolute_paths(self, tmp_path):
        data = {"storage_dir": "/var/walkathon", "export_dir": "out"}
        resolved = resolve_config_paths(data, tmp_path / "c.yaml")

        assert resolved["storage_dir"] == "/var/walkathon"
        assert resolved["export_dir"] == str((tmp_path / "out").resolve())
        assert data["export_dir"] == "out"

    def test_apply_environment_copies(self):
        data = {"feed_url": "a"}
        merged = apply_environment(data, {"WALKATHON_FEED_URL": "b"})

        assert merged == {"feed_url": "b"}
        assert data == {"feed_url": "a"}

    def test_email_configured_needs_all_three(self):
        config = Config(emailjs_service_id="s", emailjs_template_id="t")
        assert not config.email_configured
        config.emailjs_public_key = "p"
        assert config.email_configured
