from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Any

from mcp.server.fastmcp import FastMCP, Context
from mcp.server.session import ServerSession

from .config import load_config
from .hashing import sha256_file_sized
from .hmac_sha256 import HmacSha256
from .keystack import KeyStack
from .manifest import Manifest, build_manifest
from .security import PathAccessError, normalize_repo_root, normalize_rel_file
from .sha256 import Sha256

cfg = load_config()

log = logging.getLogger("mcp-sha256")
logging.basicConfig(level=getattr(logging, cfg.log_level, logging.INFO))

mcp = FastMCP(name="Local SHA-256 Toolkit")

key_stack = KeyStack(cfg.signing_keys) if cfg.signing_keys else None

# hashing is pure Python; keep it off the event loop
executor = ThreadPoolExecutor(max_workers=1)


@mcp.tool()
def digest_text(text: str, truncated: bool = False) -> dict:
    """
    SHA-256 (or SHA-224 when truncated) of a UTF-8 string.
    Returns: { algorithm, hex, size }
    """
    h = Sha256(truncated=truncated).update(text)
    return {"algorithm": h.name, "hex": h.hex(), "size": h.digest_size}


@mcp.tool()
def hmac_text(key: str, message: str, truncated: bool = False) -> dict:
    """
    HMAC-SHA256 (or HMAC-SHA224) of message under key.
    """
    h = HmacSha256(key, truncated=truncated).update(message)
    return {"algorithm": h.name, "hex": h.hex()}


@mcp.tool()
async def file_digest(repo_root: str, file_path: str, truncated: bool = False) -> dict:
    """
    Digest one file. file_path must be relative to repo_root.
    Files over MCP_SHA256_MAX_FILE_BYTES are refused.
    """
    rr = normalize_repo_root(repo_root, cfg.allowed_roots)
    abs_path = normalize_rel_file(rr, file_path)
    rel = abs_path.relative_to(rr).as_posix()
    if abs_path.stat().st_size > cfg.max_file_bytes:
        raise PathAccessError(f"{rel} is larger than {cfg.max_file_bytes} bytes")
    loop = asyncio.get_running_loop()
    hex_digest, size = await loop.run_in_executor(
        executor, partial(sha256_file_sized, abs_path, chunk_size=cfg.chunk_size, truncated=truncated)
    )
    return {
        "file_path": rel,
        "algorithm": "sha224" if truncated else "sha256",
        "hex": hex_digest,
        "size": size,
    }


@mcp.tool()
async def tree_digest(
    repo_root: str, ctx: Context[ServerSession, None, None], include_files: bool = False
) -> dict:
    """
    Digest every non-ignored file under repo_root (.gitignore / .digestignore).
    root_digest is the sha256 of the manifest in `sha256sum` format.
    """
    rr = normalize_repo_root(repo_root, cfg.allowed_roots)
    await ctx.info(f"Digest start: {rr}")
    loop = asyncio.get_running_loop()

    def build() -> tuple[Manifest, str]:
        manifest = build_manifest(rr, cfg)
        return manifest, manifest.root_digest

    manifest, root_digest = await loop.run_in_executor(executor, build)

    result: dict[str, Any] = {
        "repo_root": str(rr),
        "root_digest": root_digest,
        "files": len(manifest.entries),
    }
    if include_files:
        result["entries"] = [
            {"path": e.path, "size": e.size, "sha256": e.sha256} for e in manifest.entries
        ]
    return result


@mcp.tool()
def sign_data(data: str) -> dict:
    """Sign data with the newest configured key (URL-safe base64 HMAC-SHA256)."""
    if key_stack is None:
        return {"error": "no signing keys configured (MCP_SHA256_SIGNING_KEYS)"}
    return {"signature": key_stack.sign(data)}


@mcp.tool()
def verify_data(data: str, signature: str) -> dict:
    """Check a signature against every configured key; reports which key matched."""
    if key_stack is None:
        return {"error": "no signing keys configured (MCP_SHA256_SIGNING_KEYS)"}
    index = key_stack.index_of(data, signature)
    if index > 0:
        log.info("signature matched rotated key #%d", index)
    return {"valid": index > -1, "key_index": index}


def run_stdio() -> None:
    # Stdio transport (recommended for local MCP servers)
    log.info("allowed roots: %s", ", ".join(str(p) for p in cfg.allowed_roots))
    mcp.run()


if __name__ == "__main__":
    run_stdio()
