"""
Package entry point.

Allows:
  python -m bridge_wrangler ...

Delegates to the argparse CLI.
"""

from __future__ import annotations

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
