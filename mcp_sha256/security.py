from __future__ import annotations

from pathlib import Path
from typing import Iterable

class PathAccessError(ValueError):
    pass

def normalize_repo_root(repo_root: str, allowed_roots: Iterable[Path]) -> Path:
    allowed = list(allowed_roots)
    root = Path(repo_root).expanduser().resolve()
    if not root.is_dir():
        raise PathAccessError(f"repo_root does not exist or is not a directory: {root}")

    if any(root == base or base in root.parents for base in allowed):
        return root

    raise PathAccessError(
        "repo_root is not within MCP_ALLOWED_ROOTS. "
        f"repo_root={root} allowed={', '.join(str(p) for p in allowed)}"
    )

def normalize_rel_file(repo_root: Path, file_path: str) -> Path:
    # Relative paths only; the resolved target must stay under repo_root.
    p = Path(file_path)
    if p.is_absolute():
        raise PathAccessError("file_path must be relative to repo_root (not absolute).")
    resolved = (repo_root / p).resolve()
    if resolved != repo_root and repo_root not in resolved.parents:
        raise PathAccessError("file_path escapes repo_root (.. or symlink traversal).")
    if not resolved.is_file():
        raise PathAccessError(f"file_path is not a regular file: {p.as_posix()}")
    return resolved
