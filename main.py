#!/usr/bin/env python3
"""Entry point for the zkSync demo CLI.

Usage: python main.py {deposit,transfer,withdrawal} [--config config.json]
"""

import sys

from zksync_demo.cli import main

if __name__ == "__main__":
    sys.exit(main())
