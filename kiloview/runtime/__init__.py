"""Public runtime orchestration entry points.

This package groups the interactive viewer bootstrap (`run_viewer`) and the
lower-level session loop used by tests and composition code.
"""

from __future__ import annotations


def run_viewer(*args, **kwargs):
    """Lazily import viewer entrypoint to keep CLI imports lightweight."""
    from .app import run_viewer as _run_viewer

    return _run_viewer(*args, **kwargs)


def run_session(*args, **kwargs):
    """Lazily import loop runner to avoid package-import cycles."""
    from .loop import run_session as _run_session

    return _run_session(*args, **kwargs)


__all__ = [
    "run_viewer",
    "run_session",
]
