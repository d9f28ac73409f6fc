"""CPU temperature monitor entrypoint.

Reads the CPU temperature at a fixed interval and emails an alert
when it exceeds the configured threshold.

Usage: python -m tempmon.monitor
"""

import sys

from tempmon.monitor.cli import main

if __name__ == "__main__":
    sys.exit(main())
