import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from cipherchain.config import Settings, load_settings


@pytest.fixture
def fresh_settings():
    load_settings.cache_clear()
    yield load_settings
    load_settings.cache_clear()


def test_defaults():
    s = Settings()
    assert s.default_block_key == "mysecretkey12345"
    assert s.default_block_key_format == "text"
    assert s.block_mode == "codebook"
    assert s.global_seed == 1337


def test_environment_overrides(monkeypatch, fresh_settings):
    monkeypatch.setenv("CIPHERCHAIN_BLOCK_KEY", "00ff")
    monkeypatch.setenv("CIPHERCHAIN_BLOCK_KEY_FORMAT", " HEX ")
    monkeypatch.setenv("CIPHERCHAIN_BLOCK_MODE", "single")
    monkeypatch.setenv("CIPHERCHAIN_RUNNING_KEY", "AUTO")
    monkeypatch.setenv("GLOBAL_SEED", "42")
    s = fresh_settings()
    assert s.default_block_key == "00ff"
    assert s.default_block_key_format == "hex"
    assert s.block_mode == "single"
    assert s.default_running_key == "AUTO"
    assert s.global_seed == 42


def test_settings_are_cached(fresh_settings):
    assert fresh_settings() is fresh_settings()


def test_invalid_block_mode_rejected(monkeypatch, fresh_settings):
    monkeypatch.setenv("CIPHERCHAIN_BLOCK_MODE", "ctr")
    with pytest.raises(ValidationError):
        fresh_settings()


def test_settings_fields():
    assert "project_root" not in Settings.model_fields
    assert Settings().reports_dir == "test-reports"


def test_invalid_settings_values():
    with pytest.raises(ValidationError):
        Settings(roundtrip_vectors=0)
    with pytest.raises(ValidationError):
        Settings(default_block_key_format="base64")
