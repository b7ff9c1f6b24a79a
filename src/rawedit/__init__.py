import argparse
import logging
import sys
from pathlib import Path
from typing import cast

from .__about__ import __version__
from .config import LogConfig, get_config
from .editor import Editor
from .logs import setup_logging
from .tui.keyboard import describe_key
from .tui.terminal import Terminal, TerminalError

__all__ = ["__version__", "main"]

logger = logging.getLogger(__name__)

parser = argparse.ArgumentParser(prog="rawedit")
parser.add_argument("file", type=Path, nargs="?")


def main() -> int:
    args = parser.parse_args()
    path = cast(Path | None, args.file)

    terminal = Terminal()

    # Until the config is loaded nothing may reach stderr through logging
    setup_logging(LogConfig())

    try:
        config = get_config()
        config.keymap  # conflicting keybindings raise here, before raw mode
        setup_logging(config.log)

        editor = Editor()
        if path is not None:
            editor.open(path)

        save_key = describe_key(config.keybindings.save[0])
        quit_key = describe_key(config.keybindings.quit[0])
        editor.set_status_message(f"HELP: {save_key} = save | {quit_key} = quit")
        editor.run(terminal)
    except (TerminalError, OSError, ValueError) as e:
        logger.exception("fatal error")
        terminal.clear()
        print(f"rawedit: {e}", file=sys.stderr)
        return 1

    return 0
