"""Tests for the envreader command-line interface."""

from envreader.cli import create_parser, main


class TestLoadCommand:
    """envreader load."""

    def test_prints_requested_keys(self, write_config, capsys):
        props = write_config("app.properties", "app.name=demo\n")
        yaml_file = write_config("app.yaml", "server:\n  port: 8080\n")

        code = main(["load", str(props), str(yaml_file), "--get", "app.name", "-g", "server.port"])

        assert code == 0
        assert capsys.readouterr().out.splitlines() == ["app.name=demo", "server.port=8080"]

    def test_missing_key_exit_code(self, write_config, capsys):
        props = write_config("app.properties", "app.name=demo\n")

        assert main(["load", str(props), "--get", "not.there"]) == 1
        assert capsys.readouterr().out == ""

    def test_failed_source_reported(self, tmp_path, capsys):
        code = main(["load", str(tmp_path / "missing.yaml")])

        assert code == 1
        assert "source_not_found" in capsys.readouterr().err

    def test_no_override(self, write_config, monkeypatch, capsys):
        monkeypatch.setenv("ENVREADER_CLI_TEST", "env-value")
        props = write_config("app.properties", "ENVREADER_CLI_TEST=file-value\n")

        main(["load", str(props), "--no-override", "--get", "ENVREADER_CLI_TEST"])

        assert capsys.readouterr().out.strip() == "ENVREADER_CLI_TEST=file-value"


def test_selftest(capsys):
    assert main(["selftest"]) == 0

    out = capsys.readouterr().out
    assert "resource:envreader/resources/sample.xml: ok (4 entries)" in out
    assert "resource:envreader/resources/sample.yaml: ok" in out


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "usage: envreader" in capsys.readouterr().out


def test_parser_defaults():
    args = create_parser().parse_args(["load", "a.yaml"])

    assert args.log_level == "WARNING"
    assert args.no_override is False
    assert args.get is None
