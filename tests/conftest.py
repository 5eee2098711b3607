from pathlib import Path

import pytest

from soundbank.store import BankStore


@pytest.fixture()
def config_dir(tmp_path: Path) -> Path:
    return tmp_path / "config"


@pytest.fixture()
def store(config_dir: Path) -> BankStore:
    return BankStore(lambda: config_dir)


@pytest.fixture()
def bank_root(config_dir: Path) -> Path:
    return config_dir / "AuditoryTraining" / "SoundBank"
