"""
Tests for cli.bundle

Covers CLI invocation, exit codes, settings handling and '@file.rsp' replay.
"""

import os

import pytest
from click.testing import CliRunner

from cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def in_project(project_dir, monkeypatch):
    monkeypatch.chdir(project_dir)
    return project_dir


def read_bundle(path):
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


class TestBundleCLI:
    def test_bundles_python_files(self, runner, in_project):
        result = runner.invoke(main, ["bundle", "-o", "bundle.txt", "-l", "py", "-s", "abc", "-r"])

        expected_path = os.path.join(os.getcwd(), "bundle.txt")
        assert result.exit_code == 0
        assert f"Bundle file was created at: {expected_path}" in result.output
        assert read_bundle(expected_path) == (
            "import os\nx = 1\ny = 2\nz = 3\nprint(x)\nprint(y)\nprint(z)\nend = True\n"
            "def f():\n    return 1\nf()\nf()\nf()\n"
        )

    def test_long_options_and_note(self, runner, in_project):
        result = runner.invoke(main, [
            "bundle", "--output", "out.txt", "--language", "js", "--note", "--author", "Ada Lovelace",
        ])

        assert result.exit_code == 0
        content = read_bundle(in_project / "out.txt")
        source = os.path.join(os.getcwd(), "web", "app.JS")
        assert content == f"// Author: Ada Lovelace\n// Source: {source}\nconsole.log('hi');\n\n"

    def test_repeated_and_comma_separated_languages(self, runner, in_project):
        result = runner.invoke(main, ["bundle", "-o", "out.txt", "-l", "py", "-l", "md,js", "-s", "type"])

        assert result.exit_code == 0
        content = read_bundle(in_project / "out.txt")
        assert content.index("console.log") < content.index("# Notes") < content.index("import os")

    def test_build_output_is_never_bundled(self, runner, in_project):
        result = runner.invoke(main, ["bundle", "-o", "out.txt", "-l", "all"])

        assert result.exit_code == 0
        content = read_bundle(in_project / "out.txt")
        assert "compiled = True" not in content

    def test_author_from_environment(self, runner, in_project, monkeypatch):
        monkeypatch.setenv("CODE_BUNDLER_AUTHOR", "Grace Hopper")

        result = runner.invoke(main, ["bundle", "-o", "out.txt", "-l", "md"])

        assert result.exit_code == 0
        assert read_bundle(in_project / "out.txt").startswith("// Author: Grace Hopper\n")


class TestBundleErrors:
    def test_wrong_output_extension(self, runner, in_project):
        result = runner.invoke(main, ["bundle", "-o", "result.md", "-l", "py"])

        assert result.exit_code == 2
        assert "Error: Output file must be a valid .txt file." in result.output
        assert not (in_project / "result.md").exists()

    def test_blank_language(self, runner, in_project):
        result = runner.invoke(main, ["bundle", "-o", "out.txt", "-l", " "])
        assert result.exit_code == 2
        assert "Error:" in result.output

    def test_missing_language_option(self, runner, in_project):
        result = runner.invoke(main, ["bundle", "-o", "out.txt"])
        assert result.exit_code == 2

    def test_invalid_sort(self, runner, in_project):
        result = runner.invoke(main, ["bundle", "-o", "out.txt", "-l", "py", "-s", "size"])
        assert result.exit_code == 2
        assert "'abc' or 'type'" in result.output

    def test_no_matching_files(self, runner, in_project):
        result = runner.invoke(main, ["bundle", "-o", "out.txt", "-l", "java"])

        assert result.exit_code == 3
        assert "Error: No matching files found for the specified languages." in result.output
        assert not (in_project / "out.txt").exists()

    def test_error_is_a_single_stderr_line(self, runner, in_project):
        result = runner.invoke(main, ["bundle", "-o", "out.txt", "-l", "java"])

        assert result.exit_code == 3
        assert result.stderr == "Error: No matching files found for the specified languages.\n"

    def test_unreadable_subdirectory(self, runner, in_project, monkeypatch):
        real_scandir = os.scandir
        denied = os.path.join(os.getcwd(), "web")

        def scandir(path="."):
            if os.fspath(path) == denied:
                raise PermissionError(13, "Permission denied", denied)
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", scandir)

        result = runner.invoke(main, ["bundle", "-o", "out.txt", "-l", "py"])

        assert result.exit_code == 7
        assert result.stderr == f"Error: Access denied to the specified path: {denied}\n"

    def test_missing_config_file(self, runner, in_project):
        result = runner.invoke(main, ["bundle", "-o", "out.txt", "-l", "py", "--config", "missing.yaml"])
        assert result.exit_code == 4
        assert "Error:" in result.output

    def test_invalid_project_settings(self, runner, in_project):
        settings_dir = in_project / ".code-bundler"
        settings_dir.mkdir()
        (settings_dir / "config.yaml").write_text("log_level: chatty\n", encoding="utf-8")

        result = runner.invoke(main, ["bundle", "-o", "out.txt", "-l", "py"])

        assert result.exit_code == 4
        assert "Invalid log_level" in result.output


class TestResponseFileReplay:
    def test_replay_without_command_name(self, runner, in_project):
        rsp = in_project / "saved.rsp"
        rsp.write_text("--output out.txt\n--language md\n--note\n", encoding="utf-8")

        result = runner.invoke(main, [f"@{rsp}"])

        assert result.exit_code == 0
        assert "Bundle file was created at:" in result.output
        assert read_bundle(in_project / "out.txt").startswith("// Source: ")

    def test_replay_after_command_name(self, runner, in_project):
        rsp = in_project / "saved.rsp"
        rsp.write_text("--output out.txt\n", encoding="utf-8")

        result = runner.invoke(main, ["bundle", f"@{rsp}", "-l", "md"])

        assert result.exit_code == 0
        assert read_bundle(in_project / "out.txt") == "# Notes\n\n"

    def test_missing_response_file(self, runner, in_project):
        result = runner.invoke(main, ["@missing.rsp"])

        assert result.exit_code == 1
        assert "Error: Cannot read response file" in result.output


class TestMainGroup:
    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "code-bundler, version 1.0.0" in result.output

    def test_help_lists_commands(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "bundle" in result.output
        assert "create-rsp" in result.output
        assert "CODE_BUNDLER_AUTHOR" in result.output

    def test_bundle_help(self, runner):
        result = runner.invoke(main, ["bundle", "--help"])
        assert result.exit_code == 0
        for flag in ("--output", "--language", "--note", "--sort", "--remove-empty-lines", "--author"):
            assert flag in result.output
