"""Textual path normalization for paths reported in compile results."""

from __future__ import annotations

__all__ = ["clean_path"]


def clean_path(path: str) -> str:
    """Normalize a path to forward slashes without a leading ``./``.

    Backslashes become forward slashes, then ``//`` collapses to ``/`` in a
    single pass (so ``///`` becomes ``//``). Nothing is resolved against the
    filesystem: ``..`` segments and letter case are left alone.
    """
    result = path.replace("\\", "/").replace("//", "/")
    if result.startswith("./"):
        result = result[2:]
    return result
