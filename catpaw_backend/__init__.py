"""
Package marker for catpaw_backend.

This ensures 'catpaw_backend' is importable from the repository root,
so python -m catpaw_backend.run_server works without modifying PYTHONPATH.
"""
# PUBLIC_INTERFACE
def get_version() -> str:
    """Return the catpaw bootstrap package version (static for now)."""
    return "0.1.0"
