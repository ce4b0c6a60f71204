"""Package entry point.

Preferred invocation is via the installed console script:

    ecg-risk analyze sample1.csv sample2.csv --age 54 --pdf

For convenience we also support:

    python -m ecg_risk ...
"""

from __future__ import annotations

from .cli import app


def main() -> None:
    """Entry point used by `python -m ecg_risk`."""

    app()


if __name__ == "__main__":
    main()
