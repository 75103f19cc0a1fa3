"""Web Log Analytics - Report output"""

from typing import List, Tuple

from rich.console import Console

from .models import Report
from .patterns import MINUTE_FORMAT, SECTIONS

SECTION_STYLES = {
    'total': "bold cyan",
    'status': "bold",
    'most_visited': "bold",
    'traffic_source': "bold",
    'suspicious_ips': "bold red",
    'traffic_trend': "bold",
}


def report_sections(report: Report) -> List[Tuple[str, List[str]]]:
    """Section key plus its lines (header first), in fixed report order"""
    return [
        ('total', [f"{SECTIONS['total']}: {report.total_requests}"]),
        ('status', [f"{SECTIONS['status']}:"] + [
            f"{status}: {count}" for status, count in report.status_counts
        ]),
        ('most_visited', [f"{SECTIONS['most_visited']}:"] + [
            f"{url}: {count} requests" for url, count in report.most_visited
        ]),
        ('traffic_source', [f"{SECTIONS['traffic_source']}:"] + [
            f"{agent}: {count}" for agent, count in report.user_agents
        ]),
        ('suspicious_ips', [f"{SECTIONS['suspicious_ips']}:"] + [
            f"{ip}: {count} failed requests" for ip, count in report.suspicious_ips
        ]),
        ('traffic_trend', [f"{SECTIONS['traffic_trend']}:"] + [
            f"{minute.strftime(MINUTE_FORMAT)}: {count}" for minute, count in report.traffic_trend
        ]),
    ]


def render_report(report: Report) -> str:
    blocks = ["\n".join(lines) for _, lines in report_sections(report)]
    return "\n\n".join(blocks) + "\n"


PLAIN = dict(markup=False, highlight=False, emoji=False, soft_wrap=True)


def print_report(report: Report, console: Console):
    sections = report_sections(report)
    for i, (key, lines) in enumerate(sections):
        header, body = lines[0], lines[1:]
        console.print(header, style=SECTION_STYLES[key], **PLAIN)
        # body lines bypass rich rendering, which would expand tabs and drop control codes
        for line in body:
            console.file.write(line + "\n")
        if i < len(sections) - 1:
            console.print()
