"""Tests for the document scanner CLI."""

from __future__ import annotations

import csv
import json
from pathlib import Path

import pytest

import scan_documents

BENFORD_1000 = [301, 176, 125, 97, 79, 67, 58, 51, 46]


def _write(path: Path, counts: list[int]) -> Path:
    tokens = []
    for digit, count in enumerate(counts, start=1):
        tokens.extend(f"{digit}{i}" for i in range(count))
    path.write_text("\n".join(tokens), encoding="utf-8")
    return path


def test_json_to_stdout(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    natural = _write(tmp_path / "natural.txt", BENFORD_1000)
    uniform = _write(tmp_path / "uniform.txt", [100] * 9)
    short = _write(tmp_path / "short.txt", [1, 1, 0, 0, 0, 0, 0, 0, 0])

    code = scan_documents.main(["--format", "json", str(natural), str(uniform), str(short)])

    records = json.loads(capsys.readouterr().out)
    assert code == 0
    assert [r["relationship"] for r in records] == ["CONFORMING", "NON_CONFORMING", "INSUFFICIENT_SAMPLE"]
    assert records[0]["sample_size"] == 1000
    assert records[2]["p_value"] is None


def test_json_report_file(tmp_path: Path) -> None:
    doc = _write(tmp_path / "doc.txt", [100] * 9)
    out_dir = tmp_path / "reports"

    code = scan_documents.main(["--mode", "two-way", "--format", "json", "--output", str(out_dir), str(doc)])

    report = json.loads(next(out_dir.glob("benford_scan_*.json")).read_text())
    assert code == 0
    assert report["mode"] == "two-way"
    assert report["min_sample"] is None
    assert report["summary"] == {"SUSPECT": 1}


def test_csv_report_file(tmp_path: Path) -> None:
    doc = _write(tmp_path / "doc.txt", BENFORD_1000)
    out_dir = tmp_path / "reports"

    scan_documents.main(["--format", "csv", "--output", str(out_dir), str(doc)])

    with next(out_dir.glob("benford_scan_*.csv")).open(newline="") as handle:
        rows = list(csv.DictReader(handle))
    assert rows[0]["relationship"] == "CONFORMING"
    assert rows[0]["observed_counts"] == "|".join(str(c) for c in BENFORD_1000)


def test_console_output(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    doc = _write(tmp_path / "doc.txt", [100] * 9)

    code = scan_documents.main([str(doc)])

    out = capsys.readouterr().out
    assert code == 0
    assert "SCAN RESULTS" in out
    assert "NON_CONFORMING" in out


def test_invalid_alpha_exits_with_2(tmp_path: Path) -> None:
    doc = _write(tmp_path / "doc.txt", BENFORD_1000)

    assert scan_documents.main(["--alpha", "1.5", str(doc)]) == 2


def test_missing_file_exits_with_1(tmp_path: Path) -> None:
    doc = _write(tmp_path / "doc.txt", BENFORD_1000)

    assert scan_documents.main(["--format", "json", str(doc), str(tmp_path / "missing.txt")]) == 1


def test_flags_override_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BENFORD_ALPHA", "0.2")
    monkeypatch.setenv("BENFORD_MIN_SAMPLE", "50")
    args = scan_documents.build_parser().parse_args(["--no-min-sample", "--legacy-zero-sample", "x.txt"])

    config = scan_documents.build_config(args)

    assert config.alpha == 0.2
    assert config.min_sample is None
    assert config.strict_minimum is False


def test_console_prints_verdict_per_document(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    natural = _write(tmp_path / "natural.txt", BENFORD_1000)
    short = _write(tmp_path / "short.txt", [1, 0, 0, 0, 0, 0, 0, 0, 0])

    scan_documents.main([str(natural), str(short)])

    lines = capsys.readouterr().out.splitlines()
    assert any("CONFORMING" in line and "natural.txt" in line and "n=1000" in line for line in lines)
    assert any("INSUFFICIENT_SAMPLE" in line and "short.txt" in line and "n=1" in line for line in lines)
