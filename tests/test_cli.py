import pytest
from click.testing import CliRunner

from langcheck import cli as cli_module
from langcheck.cli import cli


@pytest.fixture
def project(write, tmp_path):
    write("en.txt", "hello=Hello\nbye=Goodbye\n")
    write("sv.txt", "hello=Hej\nbye=Hej då\n")
    write("src/app.tsx", "<FormattedMessage id=\"hello\" />\nformatMessage('bye')\n")
    return tmp_path


def invoke(project, *args):
    return CliRunner().invoke(
        cli,
        [
            "check",
            "--config-folder", str(project / "config"),
            "--root-dir", str(project),
            "--en-file", str(project / "en.txt"),
            "--sv-file", str(project / "sv.txt"),
            *args,
        ],
    )


def test_success(project):
    result = invoke(project)
    assert result.exit_code == 0, result.output
    assert "SUCCESS" in result.output


def test_missing_key(project, write):
    write("sv.txt", "hello=Hej\n")
    result = invoke(project)
    assert result.exit_code == 1
    assert "[MISSING]" in result.output
    assert "not compatible" in result.output


def test_invalid_usage(project, write):
    write("src/broken.ts", "formatMessage('missing_key')")
    result = invoke(project)
    assert result.exit_code == 1
    assert "[INVALID]" in result.output
    assert "missing_key" in result.output


def test_unused_key_and_ignore_file(project, write):
    write("src/app.tsx", '<FormattedMessage id="hello" />\n')
    result = invoke(project)
    assert result.exit_code == 1
    assert "[UNUSED]" in result.output

    ignore = write("ignore.txt", "bye\n")
    result = invoke(project, "--ignore-file", str(ignore))
    assert result.exit_code == 0, result.output


def test_malformed_table(project, write):
    write("en.txt", "not_a_pair\n")
    result = invoke(project)
    assert result.exit_code == 1
    assert "ERROR" in result.output
    assert "not_a_pair" in result.output


def test_config_adds_markers_and_extensions(project, write):
    write(
        "config/config.yml",
        "scan:\n  extensions: [vue]\nusages:\n  misc:\n    - [\"$t('\", \"')\"]\n",
    )
    write("src/app.tsx", "")
    write("src/App.vue", "{{ $t('hello') }} {{ $t('bye') }}")
    result = invoke(project)
    assert result.exit_code == 0, result.output


def test_unreadable_source_file_is_skipped(project):
    (project / "src" / "broken.ts").write_bytes(b"formatMessage('caf\xe9')")
    result = invoke(project)
    assert result.exit_code == 0, result.output
    assert "SUCCESS" in result.output


@pytest.mark.parametrize(
    "config, message",
    [
        ("- logging\n- scan\n", "top level must be a mapping"),
        ("usages:\n  misc:\n", "usages.misc must be a list"),
        ('usages:\n  misc: ["<>"]\n', "usages.misc entry '<>'"),
        ('usages:\n  misc:\n    - ["$t(\'", ""]\n', "non-empty strings"),
        ('usages:\n  other:\n    - ["(", ")"]\n', "unknown usage kind 'other'"),
        ("scan:\n  extensions:\n", "scan.extensions must be a list of strings"),
    ],
)
def test_malformed_config(project, write, config, message):
    write("config/config.yml", config)
    result = invoke(project)
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert message in result.output
    assert "[INVALID]" not in result.output
    assert "Checking translations" not in result.output


def test_missing_config_warning_uses_configured_logging(project, monkeypatch):
    events = []
    monkeypatch.setattr(cli_module.logging, "basicConfig", lambda **kwargs: events.append("basicConfig"))
    monkeypatch.setattr(cli_module.logger, "warning", lambda message: events.append(message))

    result = invoke(project)

    assert result.exit_code == 0, result.output
    assert events[0] == "basicConfig"
    assert "not found, using defaults" in events[1]
