"""
Tests for configuration and YAML profile loading.

Run with: pytest tests/test_config.py
"""

from pathlib import Path

import pytest

from cittadinanza.config import Config, load_config_yaml
from cittadinanza.session import Session


@pytest.fixture
def write_yaml(tmp_path):
    def _write(text: str) -> Path:
        path = tmp_path / "profile.yaml"
        path.write_text(text, encoding="utf-8")
        return path
    return _write


class TestDefaults:

    def test_defaults(self):
        config = Config()
        assert config.viewer.host == "127.0.0.1"
        assert config.viewer.port == 5000
        assert config.export.filename_prefix == "italian-citizenship-check"
        assert config.display.max_flags_shown == 4
        assert config.default_country == "Brasil"

    def test_accept_attribute(self):
        assert Config().accept_attribute() == ".pdf,.png,.jpg,.jpeg,.webp,.gif"

    def test_applicant_seed_applies_default_country(self):
        assert Config().applicant_seed() == {"country": "Brasil"}
        config = Config(applicant={"fullName": "Ana", "country": "Argentina"})
        assert config.applicant_seed() == {"country": "Argentina", "fullName": "Ana"}


class TestLoadConfigYaml:

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config_yaml(tmp_path / "nope.yaml")

    def test_empty_file(self, write_yaml):
        with pytest.raises(ValueError):
            load_config_yaml(write_yaml(""))

    def test_not_a_mapping(self, write_yaml):
        with pytest.raises(ValueError):
            load_config_yaml(write_yaml("- just\n- a list\n"))

    def test_applicant_must_be_mapping(self, write_yaml):
        with pytest.raises(ValueError):
            load_config_yaml(write_yaml("applicant: Maria\n"))

    def test_sections_override_defaults(self, write_yaml):
        config = load_config_yaml(write_yaml(
            "viewer:\n"
            "  port: 8080\n"
            "  debug: false\n"
            "export:\n"
            "  output_dir: summaries\n"
            "display:\n"
            "  max_flags_shown: 2\n"
            "default_country: Argentina\n"
            "accepted_extensions: [PDF, .png]\n"
        ))
        assert config.viewer.port == 8080
        assert config.viewer.debug is False
        assert config.viewer.host == "127.0.0.1"
        assert config.export.output_dir == Path("summaries")
        assert config.export.indent == 2
        assert config.display.max_flags_shown == 2
        assert config.default_country == "Argentina"
        assert config.accepted_extensions == [".pdf", ".png"]

    def test_form_prefill(self, write_yaml):
        config = load_config_yaml(write_yaml(
            "applicant:\n"
            "  fullName: Maria\n"
            "lineage:\n"
            "  ancestorName: Giuseppe\n"
            "  ancestorBirthYear: 1895\n"
        ))
        assert config.applicant == {"fullName": "Maria"}
        assert config.lineage == {"ancestorName": "Giuseppe", "ancestorBirthYear": 1895}

    def test_quoted_false_flag_stays_false(self, write_yaml):
        config = load_config_yaml(write_yaml(
            "lineage:\n"
            "  naturalizationPrecededDescendantBirth: \"false\"\n"
        ))
        session = Session.from_config(config)
        assert session.lineage.naturalization_preceded_descendant_birth is False

    def test_unrecognised_flag_value(self, write_yaml):
        with pytest.raises(ValueError, match="anyNaturalizationInLine"):
            load_config_yaml(write_yaml(
                "lineage:\n"
                "  anyNaturalizationInLine: sometimes\n"
            ))

    def test_example_profile_loads(self):
        example = Path(__file__).parent.parent / "profiles" / "example.yaml"
        config = load_config_yaml(example)
        assert config.lineage["ancestorName"] == "Giuseppe Rossi"
