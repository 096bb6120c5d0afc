from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from core.config_file import load_config, get_config_value
from core.exceptions import ConfigurationError

DEFAULT_OUTPUT_TYPE = "uint64"
# Arguments are parsed into the native 'int'.
DEFAULT_INPUT_TYPE = "int32"


def _env_flag(name: str) -> Optional[bool]:
    value = os.getenv(name)
    if value is None:
        return None
    return value.lower() in ("true", "1", "yes")


@dataclass
class Config:
    # Directory searched for .memo-factorial.toml (env: MEMO_FACTORIAL_CONFIG_DIR)
    config_dir: Path = field(default_factory=lambda: Path(os.getenv("MEMO_FACTORIAL_CONFIG_DIR", Path.cwd())))
    profile: Optional[str] = field(default_factory=lambda: os.getenv("MEMO_FACTORIAL_PROFILE") or None)
    output_type: str = DEFAULT_OUTPUT_TYPE
    input_type: str = DEFAULT_INPUT_TYPE
    show_cache: bool = False

    def __post_init__(self):
        """Layer config file and environment over the defaults."""
        self._load_config_file()
        self._load_env()

    def _load_config_file(self) -> None:
        file_config = load_config(str(self.config_dir), profile=self.profile)
        if not file_config:
            return
        self.output_type = get_config_value(file_config, "engine.output_type", self.output_type)
        self.input_type = get_config_value(file_config, "engine.input_type", self.input_type)
        self.show_cache = get_config_value(file_config, "cli.show_cache", self.show_cache)

    def _load_env(self) -> None:
        self.output_type = os.getenv("MEMO_FACTORIAL_OUTPUT", self.output_type)
        self.input_type = os.getenv("MEMO_FACTORIAL_INPUT", self.input_type)
        show_cache = _env_flag("MEMO_FACTORIAL_SHOW_CACHE")
        if show_cache is not None:
            self.show_cache = show_cache
        if not self.output_type or not self.input_type:
            raise ConfigurationError("Integer type names cannot be empty")

