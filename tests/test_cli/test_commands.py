"""Tests for CLI commands."""

import json

import pytest
from typer.testing import CliRunner

from soapnote.cli.commands import app


runner = CliRunner()


class TestVersionCommand:
    def test_version_command(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "SoapNote" in result.stdout
        assert "0.1.0" in result.stdout


class TestInterpretCommand:
    def test_interpret_json(self):
        result = runner.invoke(
            app, ["interpret", "97530 x 2", "97112, units:1", "unrecognized text", "--json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["total_minutes"] == 45
        assert data["total_units"] == 3
        assert [e["units"] for e in data["entries"]] == [2, 1, 0]

    def test_interpret_table(self):
        result = runner.invoke(app, ["interpret", "97530 x 2", "[not a code]"])

        assert result.exit_code == 0
        assert "97530" in result.stdout
        assert "CPT entries: 2 (parsed: 1)" in result.stdout

    def test_interpret_file(self, tmp_path):
        cpt_file = tmp_path / "cpt.txt"
        cpt_file.write_text("97530 (20 min)\n\n97110\n")

        result = runner.invoke(app, ["interpret", "--file", str(cpt_file), "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["total_minutes"] == 45
        assert data["entries"][0]["minutes"] == 30

    def test_interpret_fallback_duration(self):
        result = runner.invoke(app, ["interpret", "no codes", "--duration", "45", "--json"])

        data = json.loads(result.stdout)
        assert data["total_minutes"] == 45
        assert data["total_units"] == 3

    def test_interpret_missing_file(self, tmp_path):
        result = runner.invoke(app, ["interpret", "--file", str(tmp_path / "nope.txt")])

        assert result.exit_code == 1
        assert "not found" in result.stdout


class TestGenerateCommand:
    def test_generate_json(self):
        result = runner.invoke(
            app,
            [
                "generate",
                "--child", "Jane Doe",
                "--date", "2026-02-18",
                "--icd", "F82, R62.0",
                "--cpt", "97530 x 2",
                "--cpt", "97535 (15 min)",
                "--subjective", "Parent reports better sleep.",
                "--json",
            ],
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["total_minutes"] == 45
        assert data["total_units"] == 3
        assert data["icd_pretty"] == "F82, R62.0"
        assert data["duration"] == 45
        assert "Child: Jane Doe" in data["note"]
        assert "97535 x 1 unit(s) (15 min)" in data["note"]

    def test_generate_prints_note(self):
        result = runner.invoke(app, ["generate", "--cpt", "97530 x 3"])

        assert result.exit_code == 0
        assert "Pediatric Occupational Therapy SOAP Note" in result.stdout
        assert "CPT entries: 1 (parsed: 1)" in result.stdout
        assert "Session duration set to 45 min" in result.stdout

    def test_generate_from_form_file(self, tmp_path, sample_form):
        form_file = tmp_path / "form.json"
        form_file.write_text(sample_form.model_dump_json())

        result = runner.invoke(app, ["generate", "--form", str(form_file), "--therapist", "Alex Kim", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert "Therapist: Alex Kim" in data["note"]
        assert data["total_minutes"] == 45

    def test_generate_writes_outputs(self, tmp_path, sample_form):
        form_file = tmp_path / "form.json"
        form_file.write_text(sample_form.model_dump_json())
        out_dir = tmp_path / "out"

        result = runner.invoke(
            app, ["generate", "--form", str(form_file), "--pdf", "--text", "--out-dir", str(out_dir)]
        )

        assert result.exit_code == 0
        pdf_path = out_dir / "Jane_Doe_SOAP_Note.pdf"
        txt_path = out_dir / "Jane_Doe_SOAP_Note.txt"
        assert pdf_path.read_bytes()[:5] == b"%PDF-"
        assert "unrecognized text (unparsed)" in txt_path.read_text(encoding="utf-8")

    def test_generate_missing_form(self, tmp_path):
        result = runner.invoke(app, ["generate", "--form", str(tmp_path / "missing.json")])

        assert result.exit_code == 1
        assert "not found" in result.stdout

    def test_generate_invalid_form(self, tmp_path):
        form_file = tmp_path / "form.json"
        form_file.write_text('{"duration": -3}')

        result = runner.invoke(app, ["generate", "--form", str(form_file)])

        assert result.exit_code == 1
        assert "Invalid note form" in result.stdout


class TestTemplateCommand:
    def test_template(self):
        result = runner.invoke(app, ["template"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["duration"] == 45
        assert data["subjective"] == ""
