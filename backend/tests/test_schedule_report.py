import json
from pathlib import Path

import pytest

from scripts import schedule_report


def test_report_prints_summary(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    path = tmp_path / "schedule.json"
    path.write_text(
        json.dumps(
            {
                "doe, jane": {
                    "name": "Doe, Jane",
                    "school": "North",
                    "events": [{"competition": "Accounting"}, {"competition": "Production A"}],
                }
            }
        ),
        encoding="utf-8",
    )
    monkeypatch.setenv("SLC_SCHEDULE_PATH", str(path))

    assert schedule_report.main([]) == 0

    out = capsys.readouterr().out
    assert "Competitors: 1" in out
    assert "Filtered rows: 1" in out
    assert "'Production A'" in out


def test_report_json_output(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    path = tmp_path / "schedule.json"
    path.write_text(json.dumps({"roe, rick": {"name": "Roe, Rick", "events": []}}), encoding="utf-8")
    monkeypatch.setenv("SLC_SCHEDULE_PATH", str(path))

    assert schedule_report.main(["--json"]) == 0

    summary = json.loads(capsys.readouterr().out)
    assert summary["people"] == 1
    assert summary["schools"] == 0


def test_report_fails_for_missing_dataset(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    monkeypatch.setenv("SLC_SCHEDULE_PATH", str(tmp_path / "missing.json"))

    assert schedule_report.main([]) == 1
    assert "ERROR" in capsys.readouterr().err
