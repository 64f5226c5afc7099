"""Tests for the command line interface."""

import json

from typer.testing import CliRunner

from bar_race.cli import app

runner = CliRunner()

ROWS = [
    {"id": "a", "date": "2020-01-01", "value": 1},
    {"id": "b", "date": "2020-01-01", "value": 2},
    {"id": "a", "date": "2020-02-01", "value": 5},
    {"id": "b", "date": "2020-02-01", "value": 3},
]


def test_data_file_is_required():
    """Running without a data file fails."""
    result = runner.invoke(app, [])

    assert result.exit_code == 1
    assert "Data file is required" in result.output


def test_unsupported_output_format(tmp_path):
    """An unknown output extension is reported."""
    data = tmp_path / "data.json"
    data.write_text(json.dumps(ROWS))

    result = runner.invoke(app, [str(data), "--output", str(tmp_path / "race.mp4")])

    assert result.exit_code == 1
    assert "Unsupported output format" in result.output


def test_invalid_item_count(tmp_path):
    """Invalid chart options are reported."""
    data = tmp_path / "data.json"
    data.write_text(json.dumps(ROWS))

    result = runner.invoke(app, [str(data), "--item-count", "0"])

    assert result.exit_code == 1
    assert "item_count must be positive" in result.output


def test_renders_gif(tmp_path):
    """A JSON dataset renders to a GIF file."""
    data = tmp_path / "data.json"
    data.write_text(json.dumps(ROWS))
    out = tmp_path / "race.gif"

    result = runner.invoke(
        app,
        [str(data), "--output", str(out), "--fps", "5", "--duration", "6", "--max-frames", "3"],
    )

    assert result.exit_code == 0, result.output
    assert out.read_bytes().startswith(b"GIF89")


def test_summary_shows_animation_window(tmp_path):
    """The summary table reports the scene window in which bars move."""
    data = tmp_path / "data.json"
    data.write_text(json.dumps(ROWS))

    result = runner.invoke(
        app,
        [str(data), "--output", str(tmp_path / "race.gif"), "--duration", "6", "--max-frames", "1"],
    )

    assert result.exit_code == 0, result.output
    assert "Window" in result.output
    assert "[2.50, 4.00]" in result.output


def test_year_only_csv(tmp_path):
    """A CSV whose dates are bare years renders."""
    data = tmp_path / "data.csv"
    data.write_text("id,date,value\na,2000,1\nb,2000,2\na,2010,5\nb,2010,3\n")
    out = tmp_path / "race.gif"

    result = runner.invoke(app, [str(data), "--output", str(out), "--max-frames", "2"])

    assert result.exit_code == 0, result.output
    assert out.read_bytes().startswith(b"GIF89")


def test_custom_date_format(tmp_path):
    """Dates in a non-ISO layout parse with --date-format."""
    data = tmp_path / "data.csv"
    data.write_text("id,date,value\na,01/01/2020,1\na,01/02/2020,5\n")
    out = tmp_path / "race.webp"

    result = runner.invoke(
        app,
        [str(data), "--output", str(out), "--date-format", "%d/%m/%Y", "--max-frames", "2"],
    )

    assert result.exit_code == 0, result.output
    assert out.read_bytes().startswith(b"RIFF")


def test_unwritable_output_path(tmp_path):
    """Failing to write the encoded file is reported as a save error."""
    data = tmp_path / "data.json"
    data.write_text(json.dumps(ROWS))

    result = runner.invoke(
        app,
        [str(data), "--output", str(tmp_path / "missing" / "race.gif"), "--max-frames", "1"],
    )

    assert result.exit_code == 1
    assert "Failed to save file" in result.output
