import os
import tomllib
from functools import cached_property, lru_cache
from pathlib import Path

from pydantic import BaseModel, PositiveInt, computed_field

from rawedit.tui.keyboard import Key, parse_key


class FormatConfig(BaseModel):
    tab_width: PositiveInt = 4


class EditorConfig(BaseModel):
    quit_times: int = 3
    message_timeout: float = 5.0


class LogConfig(BaseModel):
    file: Path | None = None
    level: str = "WARNING"


class KeybindingsConfig(BaseModel):
    quit: list[str] = ["ctrl+q"]
    save: list[str] = ["ctrl+s"]
    refresh: list[str] = ["ctrl+l"]


class Config(BaseModel):
    format: FormatConfig = FormatConfig()
    editor: EditorConfig = EditorConfig()
    log: LogConfig = LogConfig()
    keybindings: KeybindingsConfig = KeybindingsConfig()

    @computed_field
    @cached_property
    def keymap(self) -> dict[Key, str]:
        keymap: dict[Key, str] = {}

        for command in KeybindingsConfig.model_fields:
            for name in getattr(self.keybindings, command):
                key = parse_key(name)
                try:
                    prev_command = keymap[key]
                except KeyError:
                    pass
                else:
                    raise ValueError(
                        f"conflicting commands for key {name!r}: {prev_command} and {command}"
                    )
                keymap[key] = command

        return keymap


def get_config_path() -> Path:
    try:
        xdg_config_home = Path(os.environ["XDG_CONFIG_HOME"])
    except KeyError:
        xdg_config_home = Path.home() / ".config"
    return xdg_config_home / "rawedit" / "config.toml"


@lru_cache(1)
def get_config() -> Config:
    config_path = get_config_path()
    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return Config()
    else:
        return Config.model_validate(data)
