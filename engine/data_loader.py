"""
GlyphEngine - engine/data_loader.py
JIT loaders for TOML engine configuration and binary sprite assets.
=============================================================================================
Version:     0.1
Stack:       Python 3.12 | Pydantic v2 | tomllib
Status:      Configuration and asset loading layer.
"""

import tomllib
from pathlib import Path
from typing import Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from engine.sprite import Sprite

# ================================================================================
# SCHEMAS
# ================================================================================

class DisplayDef(BaseModel):
    model_config = ConfigDict(frozen=True)
    width: int = Field(default=120, gt=0)  # columns
    height: int = Field(default=40, gt=0)  # rows
    font_width: int = Field(default=8, gt=0)  # advisory pixel size of one cell
    font_height: int = Field(default=16, gt=0)
    title: str = "GlyphEngine"
    backend: Literal["tcod", "headless"] = "tcod"
    tileset: Optional[str] = None  # CP437 16x16 tilesheet
    vsync: bool = True

class LoggingDef(BaseModel):
    model_config = ConfigDict(frozen=True)
    level: str = "INFO"
    file: Optional[str] = None

class EngineConfigDef(BaseModel):
    model_config = ConfigDict(frozen=True)
    display: DisplayDef = Field(default_factory=DisplayDef)
    logging: LoggingDef = Field(default_factory=LoggingDef)

# ================================================================================
# LOADERS & CACHE (JIT)
# ================================================================================

_CONFIG_CACHE: Optional[EngineConfigDef] = None
_SPRITE_CACHE: Dict[str, Sprite] = {}


DATA_DIR = Path(__file__).parent.parent / "data"

def get_engine_config(path: Optional[Union[str, Path]] = None) -> EngineConfigDef:
    """
    Loads the engine configuration. Without a path, data/engine.toml is read
    once and cached; a missing default file means all defaults.
    """
    global _CONFIG_CACHE
    if path is not None:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Engine configuration not found: {path}")
        with open(path, "rb") as f:
            data = tomllib.load(f)
        return EngineConfigDef(**data)

    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    default_path = DATA_DIR / "engine.toml"
    if not default_path.exists():
        _CONFIG_CACHE = EngineConfigDef()
        return _CONFIG_CACHE

    with open(default_path, "rb") as f:
        data = tomllib.load(f)

    _CONFIG_CACHE = EngineConfigDef(**data)
    return _CONFIG_CACHE

def get_sprite(sprite_id: str) -> Sprite:
    """JIT loads a sprite from data/sprites (e.g. 'ui/cursor')."""
    if sprite_id in _SPRITE_CACHE:
        return _SPRITE_CACHE[sprite_id]

    path = DATA_DIR / "sprites" / f"{sprite_id}.spr"
    if not path.exists():
        raise FileNotFoundError(f"Sprite not found: {path}")

    sprite = Sprite.load(path)
    _SPRITE_CACHE[sprite_id] = sprite
    return sprite

def clear_caches() -> None:
    global _CONFIG_CACHE
    _CONFIG_CACHE = None
    _SPRITE_CACHE.clear()
