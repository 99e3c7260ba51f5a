"""Module entrypoint for ``python -m linkpager``.

Argument parsing, stdin ingestion and runtime setup all live in
``linkpager.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
