"""Allow ``python -m style_guard``."""

from style_guard.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
