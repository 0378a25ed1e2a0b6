"""Path helpers for locating repo resources.

The package runs both as an editable install (`pip install -e .`) and from a
source checkout with `PYTHONPATH=src`; `pyproject.toml` lives outside the
package tree, so we locate the repo root by walking up from this file.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path


@lru_cache(maxsize=1)
def get_repo_root() -> Path:
    """Return the repository root (directory containing `pyproject.toml`).

    Falls back to the current working directory if a repo root cannot be found.
    """
    start = Path(__file__).resolve()
    for parent in (start, *start.parents):
        if (parent / "pyproject.toml").is_file():
            return parent
    return Path.cwd()
