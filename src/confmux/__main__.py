"""Module entry point for ``python -m confmux``."""

from confmux.cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
