"""Module entrypoint for ``python -m envytui``.

All argument parsing and runtime setup happen in ``envytui.cli``.
"""

from .cli import main


if __name__ == "__main__":
    raise SystemExit(main())
