"""Module entrypoint for the command-line runner."""
from __future__ import annotations

import sys

import app


def main() -> None:
    raise SystemExit(app.launch(sys.argv[1:]))


if __name__ == "__main__":
    main()
