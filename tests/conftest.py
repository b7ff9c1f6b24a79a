from collections.abc import Iterator
from pathlib import Path

import pytest

from rawedit.config import Config, get_config

from .utils import ConfigWriter

# Always use default config in tests


@pytest.fixture(autouse=True)
def config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Config]:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    get_config.cache_clear()
    yield get_config()
    get_config.cache_clear()


@pytest.fixture
def write_config(tmp_path: Path) -> Iterator[ConfigWriter]:
    def write_config(content: str) -> Config:
        config_path = tmp_path / "config" / "rawedit" / "config.toml"
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(content)
        get_config.cache_clear()
        return get_config()

    yield write_config
