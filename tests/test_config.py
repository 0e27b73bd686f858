from pathlib import Path

import pytest
from pydantic import ValidationError

from memory_bank_mcp.config import MemoryBankSettings, get_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(monkeypatch) -> None:
    monkeypatch.delenv("PROJECT_PATH", raising=False)
    monkeypatch.delenv("MEMORY_BANK_MCP_SETTINGS", raising=False)

    settings = MemoryBankSettings()

    assert settings.project_path is None
    assert settings.memory_bank_dirname == "memory-bank"
    assert settings.progress_flush_threshold == 10
    assert settings.server_name == "memory-bank"


def test_environment_overrides(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PROJECT_PATH", str(tmp_path))
    monkeypatch.setenv("MEMORY_BANK_LOG_LEVEL", "debug")
    monkeypatch.setenv("MEMORY_BANK_PROGRESS_FLUSH_THRESHOLD", "3")

    settings = get_settings()

    assert settings.project_path == tmp_path.resolve()
    assert settings.log_level == "DEBUG"
    assert settings.progress_flush_threshold == 3


def test_blank_project_path_is_unset(monkeypatch) -> None:
    monkeypatch.setenv("PROJECT_PATH", "")

    assert MemoryBankSettings().project_path is None


@pytest.mark.parametrize(
    ("variable", "value"),
    [
        ("MEMORY_BANK_LOG_LEVEL", "verbose"),
        ("MEMORY_BANK_PROGRESS_FLUSH_THRESHOLD", "0"),
        ("MEMORY_BANK_DIRNAME", "a/b"),
    ],
)
def test_invalid_values_rejected(monkeypatch, variable: str, value: str) -> None:
    monkeypatch.setenv(variable, value)

    with pytest.raises(ValidationError):
        MemoryBankSettings()
