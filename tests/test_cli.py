"""
Tests for the command line interface.
"""

from pathlib import Path

import pytest
from typer.testing import CliRunner
from valuedoc.cli import app

VALUES = """\
# +docs:section=Global

# Number of replicas
replicas: 1

image:
  # Image repository
  repository: nginx
"""

README = """\
# Chart

<!-- AUTO-GENERATED -->
<!-- /AUTO-GENERATED -->

Footer.
"""


class TestCLI:
    """Test cases for CLI commands."""

    @pytest.fixture(autouse=True)
    def setup(self, tmp_path, monkeypatch):
        """Set up test fixtures."""
        monkeypatch.chdir(tmp_path)
        self.runner = CliRunner()
        self.temp_dir = tmp_path
        self.values = tmp_path / "values.yaml"
        self.values.write_text(VALUES, encoding="utf-8")

    def test_version(self):
        result = self.runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "valuedoc version" in result.stdout

    def test_generate_prints_documentation(self):
        result = self.runner.invoke(app, ["generate", str(self.values)])

        assert result.exit_code == 0
        assert "### Global" in result.stdout
        assert "<td>image.repository</td>" in result.stdout

    def test_generate_uses_default_input(self):
        result = self.runner.invoke(app, ["generate"])

        assert result.exit_code == 0
        assert "<td>replicas</td>" in result.stdout

    def test_generate_injects_into_output(self):
        readme = self.temp_dir / "README.md"
        readme.write_text(README, encoding="utf-8")

        result = self.runner.invoke(
            app, ["generate", str(self.values), "--output", str(readme)]
        )

        assert result.exit_code == 0
        contents = readme.read_text(encoding="utf-8")
        assert contents.startswith("# Chart\n\n<!-- AUTO-GENERATED -->")
        assert contents.endswith("<!-- /AUTO-GENERATED -->\n\nFooter.\n")
        assert "<td>replicas</td>" in contents

    def test_generate_with_custom_markers(self):
        readme = self.temp_dir / "README.md"
        readme.write_text("Intro\n[docs]\nold\n[/docs]\n", encoding="utf-8")

        result = self.runner.invoke(
            app,
            [
                "generate",
                str(self.values),
                "-o",
                str(readme),
                "--header",
                r"^\[docs\]",
                "--footer",
                r"^\[/docs\]",
            ],
        )

        assert result.exit_code == 0
        contents = readme.read_text(encoding="utf-8")
        assert "old" not in contents
        assert contents.endswith("[/docs]\n")

    def test_generate_with_config_file(self):
        template = self.temp_dir / "names.j2"
        template.write_text(
            "{% for prop in document.properties %}\n{{ prop.name }}\n{% endfor %}\n",
            encoding="utf-8",
        )
        config = self.temp_dir / "custom.yaml"
        config.write_text(f"template: {template}\n", encoding="utf-8")

        result = self.runner.invoke(app, ["generate", "--config", str(config)])

        assert result.exit_code == 0
        assert "replicas" in result.stdout
        assert "<table>" not in result.stdout

    def test_generate_without_header_marker_fails(self):
        readme = self.temp_dir / "README.md"
        readme.write_text("No markers\n", encoding="utf-8")

        result = self.runner.invoke(
            app, ["generate", str(self.values), "--output", str(readme)]
        )

        assert result.exit_code == 1
        assert readme.read_text(encoding="utf-8") == "No markers\n"

    def test_generate_missing_input_fails(self):
        result = self.runner.invoke(app, ["generate", "missing.yaml"])

        assert result.exit_code == 1

    def test_generate_alias_cycle_fails(self):
        cyclic = self.temp_dir / "cyclic.yaml"
        cyclic.write_text("a: &x\n  - *x\n", encoding="utf-8")

        result = self.runner.invoke(app, ["generate", str(cyclic)])

        assert result.exit_code == 1

    def test_inspect(self):
        result = self.runner.invoke(app, ["inspect", str(self.values)])

        assert result.exit_code == 0
        assert "Global" in result.stdout
        assert "replicas" in result.stdout

    def test_inspect_json(self):
        result = self.runner.invoke(app, ["inspect", str(self.values), "--json"])

        assert result.exit_code == 0
        assert '"name": "Global"' in result.stdout
        assert '"name": "image.repository"' in result.stdout

    def test_inspect_invalid_yaml(self):
        broken = self.temp_dir / "broken.yaml"
        broken.write_text("a: [1, 2\n", encoding="utf-8")

        result = self.runner.invoke(app, ["inspect", str(broken)])

        assert result.exit_code == 1


class TestUtilityCommands:
    """Test cases for the utils sub-commands."""

    def setup_method(self):
        """Set up test fixtures."""
        self.runner = CliRunner()

    def test_info(self):
        result = self.runner.invoke(app, ["utils", "info"])

        assert result.exit_code == 0
        assert "valuedoc Information" in result.stdout

    def test_check_path(self):
        result = self.runner.invoke(app, ["utils", "check-path", "foo.bar[0]"])

        assert result.exit_code == 0
        assert "property" in result.stdout
        assert "index" in result.stdout

    def test_check_path_reports_partial_result(self):
        result = self.runner.invoke(app, ["utils", "check-path", "foo[0]aa"])

        assert result.exit_code == 1
        assert "foo[0]" in result.stdout

    def test_init_config(self, tmp_path):
        output = tmp_path / "conf" / "valuedoc.yaml"

        result = self.runner.invoke(app, ["utils", "init-config", "--output", str(output)])

        assert result.exit_code == 0
        assert Path(output).exists()
        assert "markdown-table" in output.read_text(encoding="utf-8")
