from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

import pathspec

from .config import Config
from .hashing import sha256_file_sized
from .ignore import load_ignore_spec, should_ignore
from .sha256 import Sha256

log = logging.getLogger(__name__)

SKIP_DIRS = {".git", ".hg", ".svn", "__pycache__"}

@dataclass(frozen=True)
class FileEntry:
    path: str       # posix path relative to the root
    size: int
    sha256: str

@dataclass
class Manifest:
    root: Path
    entries: List[FileEntry] = field(default_factory=list)

    @property
    def root_digest(self) -> str:
        # sha256 of the manifest rendered in `sha256sum` line format
        h = Sha256()
        for e in self.entries:
            h.update(f"{e.sha256}  {e.path}\n")
        return h.hex()

    def lines(self) -> list[str]:
        return [f"{e.sha256}  {e.path}" for e in self.entries]

def discover_files(repo_root: Path, ignore_spec: pathspec.PathSpec, max_file_bytes: int) -> list[Path]:
    files: list[Path] = []
    for root, dirs, filenames in os.walk(repo_root):
        root_path = Path(root)
        dirs[:] = sorted(d for d in dirs if d not in SKIP_DIRS and not d.endswith(".egg-info"))
        for fn in filenames:
            p = root_path / fn
            if p.is_symlink() or not p.is_file():
                continue
            rel = p.relative_to(repo_root).as_posix()
            if should_ignore(rel, ignore_spec):
                continue
            try:
                size = p.stat().st_size
            except OSError as e:
                log.debug("skipping %s: %s", rel, e)
                continue
            if size > max_file_bytes:
                log.debug("skipping %s: %d bytes over limit", rel, size)
                continue
            files.append(p)
    files.sort(key=lambda p: p.relative_to(repo_root).as_posix())
    return files

def build_manifest(repo_root: Path, cfg: Config) -> Manifest:
    spec = load_ignore_spec(repo_root)
    manifest = Manifest(root=repo_root)
    for f in discover_files(repo_root, spec, cfg.max_file_bytes):
        rel = f.relative_to(repo_root).as_posix()
        try:
            digest, size = sha256_file_sized(f, chunk_size=cfg.chunk_size)
        except OSError as e:
            log.warning("skipping %s: %s", rel, e)
            continue
        manifest.entries.append(FileEntry(path=rel, size=size, sha256=digest))
    log.info("manifest for %s: %d files", repo_root, len(manifest.entries))
    return manifest
