#!/usr/bin/env python3
"""Allow running as: python3 -m pinbar"""

from pinbar.cli import main
import sys

sys.exit(main() or 0)
