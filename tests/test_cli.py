"""Tests for the letterquill command line."""

import json
import zipfile

import pytest

from letterquill.cli import create_parser, main
from letterquill.version import __version__

LETTER = "<p>{{anrede}}</p><p>Wir helfen <b>{{company}}</b>.</p><p>{{qr_code}}</p>"


@pytest.fixture
def letter_file(tmp_path):
    path = tmp_path / "letter.html"
    path.write_text(LETTER, encoding="utf-8")
    return path


@pytest.fixture
def recipient_file(tmp_path):
    path = tmp_path / "anna.json"
    path.write_text(json.dumps({
        "first_name": "Anna", "last_name": "Berg", "company": "Berg GmbH", "anrede": "frau",
    }), encoding="utf-8")
    return path


@pytest.fixture
def batch_files(tmp_path):
    recipients = tmp_path / "recipients.json"
    recipients.write_text(json.dumps([
        {"first_name": "Anna", "last_name": "Berg", "company": "Berg GmbH", "industry": "Logistik"},
        {"first_name": "Max", "last_name": "Muster", "company": "Muster AG", "industry": "Bau"},
    ]), encoding="utf-8")
    templates = tmp_path / "templates.json"
    templates.write_text(json.dumps([
        {"name": "Logistik", "industry": "Logistik", "body_html": LETTER},
    ]), encoding="utf-8")
    return recipients, templates


class TestParser:
    """Test argument parsing."""

    def test_log_level_is_case_insensitive(self):
        """Test --log-level accepts lower-case names."""
        args = create_parser().parse_args(["--log-level", "debug", "version"])

        assert args.log_level == "DEBUG"

    def test_render_requires_recipient(self):
        """Test render without --recipient is a usage error."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["render", "letter.html"])


class TestCommands:
    """Test command handlers."""

    def test_version(self, capsys):
        """Test the version command prints the package version."""
        assert main(["version"]) == 0

        assert f"letterquill v{__version__}" in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        """Test running without a command shows usage."""
        assert main([]) == 0

        assert "usage: letterquill" in capsys.readouterr().out

    def test_render(self, letter_file, recipient_file, tmp_path, capsys):
        """Test rendering one letter to a chosen path."""
        output = tmp_path / "out.pdf"

        code = main(["render", str(letter_file), "--recipient", str(recipient_file), "-o", str(output)])

        assert code == 0
        assert output.read_bytes().startswith(b"%PDF-")
        assert "Saved" in capsys.readouterr().out

    def test_render_default_filename(self, letter_file, recipient_file, tmp_path, monkeypatch):
        """Test the default output name follows the letter filename rule."""
        monkeypatch.chdir(tmp_path)

        assert main(["render", str(letter_file), "-r", str(recipient_file)]) == 0

        assert (tmp_path / "Berg_Berg_GmbH_berg-gmbh.pdf").exists()

    def test_render_missing_letter(self, recipient_file, tmp_path, capsys):
        """Test a missing input file exits with an error."""
        code = main(["render", str(tmp_path / "nope.html"), "-r", str(recipient_file)])

        assert code == 1
        assert "File not found" in capsys.readouterr().err

    def test_render_invalid_json(self, letter_file, tmp_path, capsys):
        """Test malformed recipient JSON exits with an error."""
        broken = tmp_path / "broken.json"
        broken.write_text("{not json", encoding="utf-8")

        assert main(["render", str(letter_file), "-r", str(broken)]) == 1
        assert "Invalid JSON" in capsys.readouterr().err

    def test_render_recipient_must_be_object(self, letter_file, tmp_path):
        """Test a JSON array is not accepted as a single recipient."""
        array = tmp_path / "array.json"
        array.write_text("[]", encoding="utf-8")

        assert main(["render", str(letter_file), "-r", str(array)]) == 1

    def test_blocks(self, letter_file, capsys):
        """Test the blocks command prints parsed blocks as JSON."""
        assert main(["blocks", str(letter_file)]) == 0

        blocks = json.loads(capsys.readouterr().out)
        assert [block["type"] for block in blocks] == ["text", "text", "qr"]
        assert blocks[1]["spans"][1] == {"text": "{{company}}", "bold": True, "italic": False}

    def test_batch(self, batch_files, tmp_path, capsys):
        """Test a batch with one failing recipient still writes the archive."""
        recipients, templates = batch_files
        output = tmp_path / "letters.zip"

        code = main(["batch", str(recipients), "--templates", str(templates), "-o", str(output), "--workers", "2"])

        captured = capsys.readouterr()
        assert code == 0
        with zipfile.ZipFile(output) as archive:
            assert archive.namelist() == ["Berg_Berg_GmbH_berg-gmbh.pdf"]
        assert "Max Muster: No template found" in captured.err
        assert "Generated: 1" in captured.out

    def test_batch_nothing_generated(self, batch_files, tmp_path):
        """Test a batch without any letter exits with an error."""
        recipients, _ = batch_files
        templates = tmp_path / "none.json"
        templates.write_text("[]", encoding="utf-8")

        assert main(["batch", str(recipients), "-t", str(templates), "-o", str(tmp_path / "x.zip")]) == 1
        assert not (tmp_path / "x.zip").exists()

    def test_batch_wrapped_records(self, batch_files, tmp_path):
        """Test recipient and template files may wrap their arrays in an object."""
        recipients, templates = batch_files
        wrapped = tmp_path / "wrapped.json"
        wrapped.write_text(json.dumps({"recipients": json.loads(recipients.read_text(encoding="utf-8"))}), encoding="utf-8")

        assert main(["batch", str(wrapped), "-t", str(templates), "-o", str(tmp_path / "w.zip")]) == 0

    def test_batch_empty_recipients(self, batch_files, tmp_path, capsys):
        """Test an empty recipient list is an input error."""
        _, templates = batch_files
        empty = tmp_path / "empty.json"
        empty.write_text("[]", encoding="utf-8")

        assert main(["batch", str(empty), "-t", str(templates)]) == 1
        assert "No recipients" in capsys.readouterr().err
