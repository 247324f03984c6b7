# src/swc2dot/__main__.py
from __future__ import annotations

# Local imports
from .cli import main


if __name__ == "__main__":
    raise SystemExit(main())
