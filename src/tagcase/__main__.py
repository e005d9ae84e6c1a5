"""CLI entry point for tagcase."""

from __future__ import annotations

from tagcase.cli import main

if __name__ == "__main__":
    main()
