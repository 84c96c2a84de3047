"""Tests for the process-wide reader and ReaderSettings."""

import pytest
from pydantic import ValidationError

from envreader import reader
from envreader.settings import ReaderSettings


class TestReaderSettings:
    """Defaults and ENVREADER_* environment variables."""

    def test_defaults(self):
        settings = ReaderSettings()

        assert settings.override_with_environment is True
        assert settings.include_system_properties is True
        assert settings.dump_on_load is True
        assert settings.properties_encoding == "latin-1"

    def test_unknown_option_rejected(self):
        with pytest.raises(ValidationError):
            ReaderSettings(override=False)

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("ENVREADER_OVERRIDE_WITH_ENVIRONMENT", "false")
        monkeypatch.setenv("ENVREADER_DUMP_ON_LOAD", "no")
        monkeypatch.setenv("ENVREADER_PROPERTIES_ENCODING", "utf-8")

        settings = ReaderSettings.from_env()

        assert settings.override_with_environment is False
        assert settings.dump_on_load is False
        assert settings.include_system_properties is True
        assert settings.properties_encoding == "utf-8"

    def test_from_env_ignores_unrecognized_values(self, monkeypatch):
        monkeypatch.setenv("ENVREADER_OVERRIDE_WITH_ENVIRONMENT", "sometimes")

        assert ReaderSettings.from_env().override_with_environment is True


@pytest.mark.usefixtures("fresh_reader")
class TestProcessWideReader:
    """Module-level helpers in envreader.reader."""

    def test_get_reader_is_shared(self):
        assert reader.get_reader() is reader.get_reader()

    def test_settings_read_from_environment(self, monkeypatch):
        monkeypatch.setenv("ENVREADER_OVERRIDE_WITH_ENVIRONMENT", "false")

        assert reader.get_reader().override_with_environment is False

    def test_load_and_get(self, write_config):
        result = reader.load_from_file(write_config("app.properties", "app.name=demo\n"))

        assert result.ok
        assert reader.get_environment("app.name") == "demo"
        assert reader.get_environment("missing", "dflt") == "dflt"

    def test_set_override_discards_state(self, write_config):
        reader.load_from_file(write_config("app.properties", "app.name=demo\n"))
        previous = reader.get_reader()

        current = reader.set_override(False)

        assert current is not previous
        assert current is reader.get_reader()
        assert current.override_with_environment is False
        assert "app.name" not in current

    def test_load_from_system(self, monkeypatch):
        monkeypatch.setenv("ENVREADER_READER_TEST", "from-env")

        result = reader.load_from_system()

        assert result.ok
        assert reader.get_environment("ENVREADER_READER_TEST") == "from-env"

    def test_load_from_resource(self):
        result = reader.load_from_resource("envreader", "resources/sample.yaml")

        assert result.ok
        assert reader.get_environment("server.host") == "localhost"
