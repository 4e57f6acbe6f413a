import pytest
import tempfile
from pathlib import Path
import sys

# Add the project root to the Python path
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def sample_tree(temp_dir):
    """A small directory tree with an ignore file."""
    (temp_dir / "src").mkdir()
    (temp_dir / "src" / "main.py").write_text("print('hello')\n")
    (temp_dir / "src" / "util.py").write_text("X = 1\n")
    (temp_dir / "README.md").write_text("# sample\n")
    (temp_dir / "build").mkdir()
    (temp_dir / "build" / "out.bin").write_bytes(b"\x00" * 32)
    (temp_dir / "debug.log").write_text("noise\n")
    (temp_dir / ".gitignore").write_text("# generated\nbuild/\n*.log\n")
    return temp_dir


@pytest.fixture
def mock_config(temp_dir):
    """Create a configuration rooted at the temporary directory."""
    from mcp_sha256.config import Config

    return Config(
        allowed_roots=[temp_dir],
        chunk_size=4096,
        max_file_bytes=1_000_000,
        signing_keys=["new-key", "old-key"],
        log_level="INFO",
    )
