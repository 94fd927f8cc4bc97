"""
Shared pytest fixtures for buildprofile test suite.

Provides fixtures for:
- Temporary storage directories
- Sample raw settings and declaration files
"""

import shutil
from pathlib import Path
from typing import Any

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def temp_storage_dir(tmp_path: Path) -> Path:
    """Create a temporary BUILDPROFILE_HOME directory."""
    storage = tmp_path / "buildprofile-home"
    storage.mkdir()
    return storage


@pytest.fixture
def mock_storage_env(temp_storage_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point BUILDPROFILE_HOME at a temp directory.

    Also clears BUILDPROFILE_* variables that would leak into settings.

    Returns:
        Path to temporary storage directory
    """
    for name in ("BUILDPROFILE_CONFIG_DIR", "BUILDPROFILE_STATE_DIR", "BUILDPROFILE_STRICT_SIGNING"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("BUILDPROFILE_HOME", str(temp_storage_dir))
    return temp_storage_dir


@pytest.fixture
def raw_settings() -> dict[str, Any]:
    """Valid raw settings for a release build with desugaring."""
    return {
        "minSdk": 21,
        "targetSdk": 34,
        "compileSdk": 36,
        "applicationId": "com.example.app",
        "desugaringEnabled": True,
        "dependencies": [("desugar_jdk_libs", "2.0.4")],
    }


@pytest.fixture
def release_identity() -> dict[str, Any]:
    """Complete release signing identity."""
    return {
        "storeFile": "keystore/release.jks",
        "storePassword": "store-secret",
        "keyAlias": "upload",
        "keyPassword": "key-secret",
    }


@pytest.fixture
def declaration_file(tmp_path: Path) -> Path:
    """Copy of the student reminder app declaration in a temp directory."""
    target = tmp_path / "build.yaml"
    shutil.copy(FIXTURES_DIR / "student_reminder_app.yaml", target)
    return target
