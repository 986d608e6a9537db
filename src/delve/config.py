from __future__ import annotations

import logging
import os
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Tuple, Union

import yaml
from platformdirs import user_config_dir
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .colors import Color, parse_color
from .exceptions import ConfigError

logger = logging.getLogger(__name__)

APP_NAME = "delve"
ENV_CONFIG_PATH = "DELVE_CONFIG"
_DEFAULTS_PKG = "delve.data"
_DEFAULTS_FILE = "defaults.yaml"


class ScreenSettings(BaseModel):
    """Console layout. The message column sits to the right of the HP bar."""

    width: int = Field(80, gt=0)
    height: int = Field(50, gt=0)
    panel_height: int = Field(7, gt=1)
    bar_width: int = Field(20, gt=0)
    inventory_width: int = Field(50, gt=0)
    fps: int = Field(25, gt=0)

    @property
    def panel_y(self) -> int:
        return self.height - self.panel_height

    @property
    def msg_x(self) -> int:
        return self.bar_width + 2

    @property
    def msg_width(self) -> int:
        return self.width - self.bar_width - 2

    @property
    def msg_height(self) -> int:
        return self.panel_height - 1


class DungeonSettings(BaseModel):
    width: int = Field(80, ge=3)
    height: int = Field(43, ge=3)
    max_rooms: int = Field(30, ge=1)
    room_min_size: int = Field(6, ge=3)
    room_max_size: int = Field(10, ge=3)
    max_room_monsters: int = Field(4, ge=0)
    max_room_items: int = Field(3, ge=0)

    @model_validator(mode="after")
    def _check_room_sizes(self) -> "DungeonSettings":
        if self.room_min_size > self.room_max_size:
            raise ValueError("room_min_size must not exceed room_max_size")
        if self.room_max_size >= min(self.width, self.height):
            raise ValueError("room_max_size must be smaller than the map")
        return self


class FovSettings(BaseModel):
    torch_radius: int = Field(10, ge=0)
    light_walls: bool = True


class _Template(BaseModel):
    name: str
    char: str = Field(..., min_length=1, max_length=1)
    color: Color

    @field_validator("color", mode="before")
    @classmethod
    def _coerce_color(cls, v: Any) -> Color:
        return parse_color(v)


class PlayerTemplate(_Template):
    name: str = "me"
    char: str = "@"
    color: Color = (255, 255, 255)
    max_hp: int = Field(30, gt=0)
    defense: int = 2
    power: int = 5


class MonsterTemplate(_Template):
    max_hp: int = Field(..., gt=0)
    defense: int = 0
    power: int = 0
    chance: float = Field(..., ge=0.0, le=1.0)


class ItemTemplate(_Template):
    kind: Literal["heal"] = "heal"
    amount: int = Field(4, gt=0)


class GameConfig(BaseModel):
    """Validated game configuration."""

    screen: ScreenSettings = Field(default_factory=ScreenSettings)
    dungeon: DungeonSettings = Field(default_factory=DungeonSettings)
    fov: FovSettings = Field(default_factory=FovSettings)
    inventory_capacity: int = Field(26, ge=0, le=26)
    player: PlayerTemplate = Field(default_factory=PlayerTemplate)
    monsters: List[MonsterTemplate] = Field(default_factory=list)
    items: List[ItemTemplate] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_layout(self) -> "GameConfig":
        if sum(m.chance for m in self.monsters) > 1.0 + 1e-9:
            raise ValueError("monster chances must sum to at most 1.0")
        if self.dungeon.width > self.screen.width or self.dungeon.height > self.screen.panel_y:
            raise ValueError("dungeon does not fit on screen above the panel")
        return self


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _read_yaml(text: str, origin: str) -> Dict[str, Any]:
    try:
        raw = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {origin}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError(f"Config {origin} must be a mapping, got {type(raw).__name__}")
    return raw


def load_defaults() -> Dict[str, Any]:
    """Return the embedded default configuration as a plain mapping."""
    text = resources.files(_DEFAULTS_PKG).joinpath(_DEFAULTS_FILE).read_text(encoding="utf-8")
    logger.debug("Loaded embedded default config resource")
    return _read_yaml(text, _DEFAULTS_FILE)


def user_config_path() -> Path:
    return Path(user_config_dir(appname=APP_NAME)) / "config.yaml"


def _override_paths(explicit: Optional[Union[str, Path]]) -> Tuple[Path, ...]:
    paths = []
    env_path = os.getenv(ENV_CONFIG_PATH)
    if env_path:
        paths.append(Path(env_path))
    else:
        user_path = user_config_path()
        if user_path.exists():
            paths.append(user_path)
    if explicit is not None:
        path = Path(explicit)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        paths.append(path)
    return tuple(paths)


def load_config(path: Optional[Union[str, Path]] = None) -> GameConfig:
    """Load the game configuration.

    The embedded defaults are deep-merged with, in order, the file named by
    ``DELVE_CONFIG`` (or the per-user ``config.yaml`` when the variable is
    unset) and the explicit ``path``. Later sources win.

    Raises:
        ConfigError: if a source cannot be parsed or the result is invalid.
    """
    data = load_defaults()
    for override in _override_paths(path):
        try:
            text = override.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot read config {override}: {exc}") from exc
        data = _deep_merge(data, _read_yaml(text, str(override)))
        logger.info("Applied config overrides from %s", override)
    try:
        return GameConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid game configuration: {exc}") from exc
