"""Module entrypoint for ``python -m acli``.

The command executor relies on this to run ``ctag`` in a child process.
"""

from .cli import main


if __name__ == "__main__":
    raise SystemExit(main())
