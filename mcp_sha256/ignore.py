from __future__ import annotations

from pathlib import Path
from typing import Iterable
import pathspec

IGNORE_FILES = (".gitignore", ".digestignore")

def load_ignore_spec(repo_root: Path, extra_patterns: Iterable[str] = ()) -> pathspec.PathSpec:
    patterns: list[str] = []
    for name in IGNORE_FILES:
        f = repo_root / name
        if f.is_file():
            patterns += f.read_text(encoding="utf-8", errors="ignore").splitlines()
    patterns += list(extra_patterns)

    patterns = [p for p in patterns if p.strip() and not p.strip().startswith("#")]
    return pathspec.PathSpec.from_lines("gitwildmatch", patterns)

def should_ignore(rel_posix: str, spec: pathspec.PathSpec) -> bool:
    # Pathspec expects forward-slash paths
    return spec.match_file(rel_posix)
