#!/usr/bin/env python3
"""Web Log Analytics - Entry point"""

from weblog_analytics.cli import main


if __name__ == "__main__":
    main()
