import io

from rich.console import Console

from weblog_analytics import LogAnalyzer, print_report, render_report

EXPECTED_SAMPLE_REPORT = """\
Total Requests: 5

Status Codes:
200: 2
404: 2
500: 1

Most Visited URLs:
/home: 2 requests
/products: 2 requests
/checkout: 1 requests

Traffic Source:
Chrome/90.0: 2
Mozilla/5.0: 2
Safari/14.0: 1

Suspicious IPs:

Traffic Trend:
2024-02-01 10:15: 1
2024-02-01 10:16: 1
2024-02-01 10:17: 1
2024-02-01 10:18: 1
2024-02-01 10:19: 1
"""


def test_render_sample_report(sample_lines):
    report = LogAnalyzer().analyze_lines(sample_lines)
    assert render_report(report) == EXPECTED_SAMPLE_REPORT


def test_render_suspicious_section():
    lines = ["10.1.1.1,2024-02-01 10:00:00,/admin,404,ua\n"] * 4
    text = render_report(LogAnalyzer().analyze_lines(lines))
    assert "Suspicious IPs:\n10.1.1.1: 4 failed requests\n" in text


def test_render_empty_report_keeps_all_headers():
    text = render_report(LogAnalyzer().analyze_lines([]))
    assert text == (
        "Total Requests: 0\n\nStatus Codes:\n\nMost Visited URLs:\n\n"
        "Traffic Source:\n\nSuspicious IPs:\n\nTraffic Trend:\n"
    )


def test_print_report_matches_plain_text(sample_lines):
    report = LogAnalyzer().analyze_lines(sample_lines)
    buf = io.StringIO()
    console = Console(file=buf, color_system=None, soft_wrap=True)
    print_report(report, console)
    assert buf.getvalue() == render_report(report)


def test_print_report_does_not_interpret_markup():
    lines = ["1.1.1.1,2024-02-01 10:00:00,/[bold]x[/bold],200,ua\n"]
    report = LogAnalyzer().analyze_lines(lines)
    buf = io.StringIO()
    print_report(report, Console(file=buf, color_system=None, soft_wrap=True))
    assert "/[bold]x[/bold]: 1 requests" in buf.getvalue()


def test_print_report_keeps_tabs_and_control_characters():
    lines = ['1.1.1.1,2024-02-01 10:00:00,/,200,"a\tb\x07c"\n']
    report = LogAnalyzer().analyze_lines(lines)
    buf = io.StringIO()
    print_report(report, Console(file=buf, color_system=None, soft_wrap=True))
    assert buf.getvalue() == render_report(report)
    assert "a\tb\x07c: 1\n" in buf.getvalue()
