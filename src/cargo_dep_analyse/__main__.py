"""Allow ``python -m cargo_dep_analyse``."""

from __future__ import annotations

from .cli import main

if __name__ == "__main__":
    main()
