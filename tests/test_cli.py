from __future__ import annotations

import pytest
from typer.testing import CliRunner

from partsmith import cli
from partsmith._config import PrinterSettings, UnitSettings

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    monkeypatch.setattr(cli, "get_unit_settings", lambda: UnitSettings("millimeters", "mm", 1.0))
    monkeypatch.setattr(cli, "get_printer_settings", lambda: PrinterSettings(nozzle_diameter=0.4))


def test_thread_info_table() -> None:
    result = runner.invoke(cli.app, ["thread-info", "8", "1.25", "5", "--segments", "16"])
    assert result.exit_code == 0, result.output
    assert "step count" in result.output
    assert "48" in result.output
    assert "warning" not in result.output


def test_thread_info_reports_empty_thread() -> None:
    result = runner.invoke(cli.app, ["thread-info", "8", "1.25", "1"])
    assert result.exit_code == 0, result.output
    assert "does not exceed pitch" in result.output


def test_export_binary(tmp_path, model_file) -> None:
    output = tmp_path / "out" / "model.stl"
    result = runner.invoke(cli.app, ["export", str(model_file), "--output", str(output)])
    assert result.exit_code == 0, result.output
    assert output.exists()
    assert "Export complete" in result.output

    count = int.from_bytes(output.read_bytes()[80:84], "little")
    assert output.stat().st_size == 84 + 50 * count


def test_export_does_not_overwrite(tmp_path, model_file) -> None:
    output = tmp_path / "model.stl"
    output.write_text("keep")
    result = runner.invoke(cli.app, ["export", str(model_file), "--output", str(output), "--ascii"])
    assert result.exit_code == 0, result.output
    assert output.read_text() == "keep"
    assert (tmp_path / "model (1).stl").read_text().startswith("solid partsmith")


def test_export_requires_build(tmp_path) -> None:
    model = tmp_path / "broken.py"
    model.write_text("VALUE = 1\n")
    result = runner.invoke(cli.app, ["export", str(model), "--output", str(tmp_path / "x.stl")])
    assert result.exit_code != 0
    assert not (tmp_path / "x.stl").exists()
