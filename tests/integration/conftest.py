from pathlib import Path

import pytest

from plagcheck.config.settings import Settings
from plagcheck.processor.processor import Engine, build_engine


@pytest.fixture()
def test_settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    monkeypatch.setenv("REPORT_ACCESS_SECRET", "integration-test-secret")
    return Settings()


@pytest.fixture()
def engine(test_settings: Settings, tmp_path: Path, clock) -> Engine:
    return build_engine(test_settings, data_dir=tmp_path / "data", clock=clock)
