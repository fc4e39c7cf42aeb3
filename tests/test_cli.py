"""
Tests for the CLI — click commands against a real site directory.
"""

import json
from pathlib import Path

from click.testing import CliRunner

from autostubs.main import cli


def _run(config_path: Path, *args: str):
    return CliRunner().invoke(cli, ["--config", str(config_path), *args])


class TestCliBasics:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        for name in ("sync", "generate", "types", "config", "hook", "web"):
            assert name in result.output

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_hook_help(self):
        result = CliRunner().invoke(cli, ["hook", "--help"])
        assert result.exit_code == 0
        assert "field-saved" in result.output
        assert "fieldgroup-saved" in result.output


# ═══════════════════════════════════════════════════════════════════
#  sync / generate
# ═══════════════════════════════════════════════════════════════════


class TestSync:
    def test_sync_json(self, config_path: Path, classes_dir: Path):
        result = _run(config_path, "sync", "--json")
        assert result.exit_code == 0, result.output

        data = json.loads(result.stdout)
        assert data["ok"] is True
        assert data["total"] == 4
        assert data["changed"] == 4
        assert data["skipped_templates"] == ["admin"]
        assert (classes_dir / "EventPage.php").is_file()
        assert not (classes_dir / "AdminPage.php").exists()

    def test_sync_twice_unchanged(self, config_path: Path):
        _run(config_path, "sync")
        data = json.loads(_run(config_path, "sync", "--json").stdout)
        assert data["changed"] == 0
        assert {r["action"] for r in data["results"]} == {"unchanged"}

    def test_sync_human(self, config_path: Path):
        result = _run(config_path, "sync")
        assert result.exit_code == 0
        assert "EventPage" in result.output
        assert "4 changed, 0 failed, 4 total" in result.output

    def test_sync_failure_exit_code(self, config_path: Path, project_dir: Path):
        (project_dir / "site").mkdir()
        (project_dir / "site" / "classes").write_text("not a directory")
        result = _run(config_path, "sync")
        assert result.exit_code == 1
        assert "4 failed" in result.output

    def test_missing_config(self, tmp_path: Path):
        result = _run(tmp_path / "nope.yml", "sync")
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_generate_named(self, config_path: Path, classes_dir: Path):
        result = _run(config_path, "generate", "news", "--json")
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [r["class_name"] for r in data["results"]] == ["NewsPage"]
        assert sorted(p.name for p in classes_dir.iterdir()) == ["NewsPage.php"]

    def test_generate_unknown_template(self, config_path: Path):
        result = _run(config_path, "generate", "event", "nope")
        assert result.exit_code == 0
        assert "nope" in result.output
        assert "unknown template" in result.output

    def test_generate_requires_names(self, config_path: Path):
        result = _run(config_path, "generate")
        assert result.exit_code == 2


# ═══════════════════════════════════════════════════════════════════
#  types / config check / hook
# ═══════════════════════════════════════════════════════════════════


class TestTypes:
    def test_types_json(self, config_path: Path):
        result = _run(config_path, "types", "--json")
        assert result.exit_code == 0
        table = json.loads(result.stdout)
        assert table["integer"] == "int"
        assert table["page"] == "<dynamic>"

    def test_types_table(self, config_path: Path):
        result = _run(config_path, "types")
        assert result.exit_code == 0
        assert "checkbox" in result.output


class TestConfigCheck:
    def test_valid(self, config_path: Path):
        result = _run(config_path, "config", "check")
        assert result.exit_code == 0
        assert "Configuration is valid" in result.output
        assert "Templates: 5" in result.output

    def test_json_warnings(self, config_path: Path):
        result = _run(config_path, "config", "check", "--json")
        data = json.loads(result.stdout)
        assert data["valid"] is True
        assert data["template_count"] == 5
        assert any("Classes directory does not exist" in w for w in data["warnings"])

    def test_unmapped_type_warned(self, config_path: Path, project_dir: Path):
        schema = project_dir / "schema.yml"
        schema.write_text(schema.read_text().replace("type: textarea", "type: FieldtypeMystery"))
        data = json.loads(_run(config_path, "config", "check", "--json").stdout)
        assert any("'body'" in w and "FieldtypeMystery" in w for w in data["warnings"])

    def test_invalid_schema(self, config_path: Path, project_dir: Path):
        (project_dir / "schema.yml").write_text("fields: 3\n")
        result = _run(config_path, "config", "check")
        assert result.exit_code == 1
        assert "Invalid schema" in result.output


class TestHook:
    def test_field_saved(self, config_path: Path):
        result = _run(config_path, "hook", "field-saved", "title", "--json")
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["changed"] == 3
        assert data["skipped_templates"] == ["admin"]

    def test_template_saved(self, config_path: Path, classes_dir: Path):
        result = _run(config_path, "hook", "template-saved", "repeater_blocks")
        assert result.exit_code == 0
        assert "BlocksRepeaterMatrixPage" in result.output
        assert (classes_dir / "BlocksRepeaterMatrixPage.php").is_file()

    def test_context_saved(self, config_path: Path):
        result = _run(config_path, "hook", "context-saved", "photos", "event", "--json")
        data = json.loads(result.stdout)
        assert [r["template"] for r in data["results"]] == ["event"]

    def test_fieldgroup_saved(self, config_path: Path):
        result = _run(config_path, "hook", "fieldgroup-saved", "basic-page", "--json")
        data = json.loads(result.stdout)
        assert [r["template"] for r in data["results"]] == ["basic-page", "news"]
