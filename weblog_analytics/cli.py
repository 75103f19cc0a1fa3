"""Web Log Analytics - Command line interface"""

import argparse
import json
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from .analyzer import LogAnalyzer
from .config import AnalyzerConfig
from .errors import ConfigurationError
from .output import print_report, render_report
from .patterns import DEFAULT_THRESHOLD, DEFAULT_TOP_N, VERSION
from .sources import open_source


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="weblog-analytics",
        description="Web Log Analytics - Descriptive reports over an access log",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Input lines: ip,timestamp,url,status,user_agent (header optional)",
    )

    parser.add_argument("logfile", help="Log file to analyze ('-' for stdin, .gz accepted)")
    parser.add_argument("-n", "--top", type=int, default=DEFAULT_TOP_N,
                        help="Number of most visited URLs to show")
    parser.add_argument("-t", "--threshold", type=int, default=DEFAULT_THRESHOLD,
                        help="Flag IPs with more failed requests than this")
    parser.add_argument("--failure-status", type=int, action="append", metavar="CODE",
                        help="Status counted as a failure (repeatable, default: 404 and 500)")
    parser.add_argument("-w", "--workers", type=int, default=1,
                        help="Partitions to aggregate in parallel")
    parser.add_argument("-o", "--output", help="Also write the report to this file")
    parser.add_argument("-j", "--json", action="store_true", help="JSON output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"WebLogAnalytics v{VERSION}")
    return parser


def setup_logging(verbose: bool, console: Console):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def main(argv=None):
    args = build_parser().parse_args(argv)

    err_console = Console(stderr=True)
    setup_logging(args.verbose, err_console)
    log = logging.getLogger("weblog_analytics")

    try:
        analyzer = LogAnalyzer(
            AnalyzerConfig.from_args(args),
            console=err_console if err_console.is_terminal else None,
        )
        source = open_source(args.logfile)
    except ConfigurationError as e:
        log.error("Configuration error: %s", e)
        sys.exit(2)
    except FileNotFoundError as e:
        log.error("%s", e)
        sys.exit(1)

    report = analyzer.analyze_source(source)

    if args.json:
        rendered = json.dumps(report.to_dict(), indent=2)
        print(rendered)
    else:
        rendered = render_report(report)
        print_report(report, Console(soft_wrap=True))

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(rendered if rendered.endswith("\n") else rendered + "\n")
        err_console.print(f"[green]Report saved to:[/] {args.output}")


if __name__ == "__main__":
    main()
