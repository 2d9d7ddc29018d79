"""Module entrypoint for ``python -m gqlhttp``."""

from gqlhttp.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
