import os
import sys
import hashlib
import pytest
from click.testing import CliRunner

# Add project root to sys.path for local imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from utils.concat_sha1_config import load_configuration, write_temp_config
from services.hashing_service import HashingService

# ────────────────────────────────────────────────
# CONFIGURATION FIXTURES
# ────────────────────────────────────────────────

@pytest.fixture
def test_config_path(tmp_path):
    """Create a temporary configuration file for ConcatSHA1 tests."""
    return write_temp_config(
        {
            "Hashing": {"chunk_size": "4096", "fast_path": "true"},
            "Output": {"format": "words"},
        },
        str(tmp_path),
    )


@pytest.fixture
def config(test_config_path):
    """Load the configuration from the test config path."""
    return load_configuration(str(test_config_path))


@pytest.fixture(autouse=True)
def clear_env_overrides(monkeypatch):
    """Keep developer environment overrides out of the tests."""
    for env_var in ("CONCAT_SHA1_CHUNK_SIZE", "CONCAT_SHA1_FAST_PATH", "CONCAT_SHA1_OUTPUT_FORMAT"):
        monkeypatch.delenv(env_var, raising=False)


# ────────────────────────────────────────────────
# SERVICE FIXTURES
# ────────────────────────────────────────────────

@pytest.fixture(params=[True, False], ids=["fast_path", "bytewise"])
def hashing_service(request):
    """HashingService with and without the whole-block fast path."""
    return HashingService(chunk_size=4096, fast_path=request.param)


@pytest.fixture
def reference_sha1():
    """Reference SHA-1 hex digest from the standard library."""
    return lambda data: hashlib.sha1(data).hexdigest()


@pytest.fixture
def write_file(tmp_path):
    """Write bytes to a file under tmp_path and return its path as a string."""
    def _write(data: bytes, name: str = "data.bin") -> str:
        path = tmp_path / name
        path.write_bytes(data)
        return str(path)
    return _write


# ────────────────────────────────────────────────
# CLI FIXTURES
# ────────────────────────────────────────────────

@pytest.fixture
def runner():
    """Fixture providing a Click CliRunner instance."""
    return CliRunner()


@pytest.fixture
def cli_obj():
    """Context object as built by the main CLI group with default settings."""
    return {"config": {}, "hashing": HashingService(), "output_format": "hex"}
