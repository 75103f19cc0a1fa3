import io
import json
import sys

import pytest

from weblog_analytics.cli import main


def test_cli_text_report(sample_file, capsys):
    main([str(sample_file)])
    out = capsys.readouterr().out
    assert out.startswith("Total Requests: 5\n")
    assert "/home: 2 requests" in out
    assert "2024-02-01 10:19: 1" in out


def test_cli_json_report(sample_file, capsys):
    main([str(sample_file), "--json", "--top", "1"])
    data = json.loads(capsys.readouterr().out)
    assert data["total_requests"] == 5
    assert data["status_codes"] == {"200": 2, "404": 2, "500": 1}
    assert data["most_visited"] == [{"url": "/home", "count": 2}]
    assert data["suspicious_ips"] == []
    assert data["diagnostics"]["skipped_headers"] == 1


def test_cli_threshold_and_failure_status(sample_file, capsys):
    main([str(sample_file), "-j", "-t", "1", "--failure-status", "404"])
    data = json.loads(capsys.readouterr().out)
    assert data["suspicious_ips"] == []
    main([str(sample_file), "-j", "-t", "1", "--failure-status", "200"])
    data = json.loads(capsys.readouterr().out)
    assert data["suspicious_ips"] == [{"ip": "192.168.1.1", "failed": 2}]


def test_cli_writes_output_file(sample_file, tmp_path, capsys):
    out_path = tmp_path / "report.txt"
    main([str(sample_file), "-o", str(out_path)])
    capsys.readouterr()
    assert out_path.read_text(encoding="utf-8").startswith("Total Requests: 5\n\nStatus Codes:\n200: 2\n")


def test_cli_missing_file(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / "missing.log")])
    assert exc.value.code == 1


def test_cli_configuration_error(sample_file):
    with pytest.raises(SystemExit) as exc:
        main([str(sample_file), "--threshold", "0"])
    assert exc.value.code == 2


def test_cli_stdin_with_undecodable_bytes(sample_lines, monkeypatch, capsys):
    data = "".join(sample_lines).encode("utf-8") + b"192.168.1.9,2024-02-01 10:20:00,/\xff,200,ua\n"
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(data), encoding="utf-8"))
    main(["-", "--json"])
    report = json.loads(capsys.readouterr().out)
    assert report["total_requests"] == 6
    assert report["diagnostics"]["rejected"] == 0
    assert report["traffic_trend"][-1] == {"minute": "2024-02-01 10:20", "count": 1}
