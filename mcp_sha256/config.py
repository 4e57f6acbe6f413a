from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import List

@dataclass(frozen=True)
class Config:
    # Security: only digest files inside these directories (colon-separated).
    allowed_roots: List[Path]

    # File hashing
    chunk_size: int = 1024 * 1024
    max_file_bytes: int = 10_000_000

    # KeyStack signing keys, newest first. Empty disables sign/verify tools.
    signing_keys: List[str] = field(default_factory=list)

    log_level: str = "INFO"

def load_config() -> Config:
    allowed = os.getenv("MCP_ALLOWED_ROOTS", "").strip()
    if allowed:
        roots = [Path(p).expanduser().resolve() for p in allowed.split(":") if p.strip()]
    else:
        # Safe-ish default: current working directory only.
        roots = [Path.cwd().resolve()]

    keys = os.getenv("MCP_SHA256_SIGNING_KEYS", "")
    signing_keys = [k.strip() for k in keys.split(",") if k.strip()]

    return Config(
        allowed_roots=roots,
        chunk_size=max(1, int(os.getenv("MCP_SHA256_CHUNK_SIZE", str(1024 * 1024)))),
        max_file_bytes=int(os.getenv("MCP_SHA256_MAX_FILE_BYTES", "10000000")),
        signing_keys=signing_keys,
        log_level=os.getenv("MCP_SHA256_LOG_LEVEL", "INFO").strip().upper() or "INFO",
    )
