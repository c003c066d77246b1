import sys
from pathlib import Path

import pytest
from click.testing import CliRunner

# Ensure local source package (src/khttp) is importable before tests collect
_PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
_SRC_PATH: Path = _PROJECT_ROOT / "src"
if _SRC_PATH.exists():
    sys.path.insert(0, str(_SRC_PATH))

from khttp import config  # noqa: E402


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clean environment variables and library defaults before each test."""
    monkeypatch.delenv("KHTTP_DEFAULT_ENCODING", raising=False)
    monkeypatch.delenv("KHTTP_DEFAULT_TIMEOUT", raising=False)
    monkeypatch.delenv("KHTTP_ALLOW_DUPLICATE_CALLBACKS", raising=False)
    monkeypatch.setattr(config, "default_encoding", "utf-8")
    monkeypatch.setattr(config, "default_timeout", 0)
    monkeypatch.setattr(config, "allow_duplicate_callbacks", False)


@pytest.fixture
def base_url() -> str:
    return "http://localhost:1337"


@pytest.fixture
def uniq() -> str:
    return "5f3a9c"
