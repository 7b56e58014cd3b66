"""
WFCGen - engine/data_loader.py
JIT Data Loaders for TOML settings powered by Pydantic.
=======================================================
Version:     0.2
Stack:       Python 3.11+ | Pydantic v2 | tomllib
Status:      Configuration and validation layer.
"""

import tomllib
from pathlib import Path
from typing import Dict, List, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, field_validator

from engine.tiles import GenTile

# ================================================================================
# SCHEMAS
# ================================================================================

class GenerationDef(BaseModel):
    model_config = ConfigDict(frozen=True)
    tile_set: str = "terrain"
    size: int = Field(default=10, ge=1)
    seed: Optional[int] = None
    trace: bool = False # dump the possibility grid at every propagation step
    max_attempts: int = Field(default=3, ge=1) # whole-run retries, viewer only

class DisplayDef(BaseModel):
    model_config = ConfigDict(frozen=True)
    title: str = "wave-function-collapse-demo"
    cell_width: int = Field(default=5, ge=1) # console cells per tile
    cell_height: int = Field(default=3, ge=1)
    margin: int = Field(default=2, ge=0)
    show_glyphs: bool = False

class PaletteDef(BaseModel):
    model_config = ConfigDict(frozen=True)
    colors: Dict[str, List[int]] = Field(default_factory=dict)

    @field_validator("colors")
    @classmethod
    def _rgb(cls, value: Dict[str, List[int]]) -> Dict[str, List[int]]:
        for name, rgb in value.items():
            if len(rgb) != 3 or not all(0 <= c <= 255 for c in rgb):
                raise ValueError(f"Color for '{name}' must be three ints in 0..255, got {rgb}")
        return value

    def color_for(self, tile: GenTile) -> tuple:
        return tuple(self.colors.get(tile.name.lower(), (255, 0, 255)))

class SettingsDef(BaseModel):
    model_config = ConfigDict(frozen=True)
    generation: GenerationDef = Field(default_factory=GenerationDef)
    display: DisplayDef = Field(default_factory=DisplayDef)
    palettes: Dict[str, PaletteDef] = Field(default_factory=dict)

    def palette(self, tile_set: Optional[str] = None) -> PaletteDef:
        return self.palettes.get(tile_set or self.generation.tile_set, PaletteDef())

# ================================================================================
# LOADERS & CACHE (JIT)
# ================================================================================

_SETTINGS_CACHE: Dict[Path, SettingsDef] = {}

DATA_DIR = Path(__file__).parent.parent / "data"
DEFAULT_SETTINGS_PATH = DATA_DIR / "settings.toml"

def get_settings(path: Optional[Path] = None) -> SettingsDef:
    """Loads settings from TOML. Cached per path."""
    explicit = path is not None
    path = Path(path) if explicit else DEFAULT_SETTINGS_PATH
    if path in _SETTINGS_CACHE:
        return _SETTINGS_CACHE[path]

    if not path.exists():
        if explicit:
            raise FileNotFoundError(f"Settings file not found: {path}")
        return SettingsDef()

    with open(path, "rb") as f:
        data = tomllib.load(f)

    settings = SettingsDef(**data)
    _SETTINGS_CACHE[path] = settings
    return settings

def get_tile_type(name: str) -> Type[GenTile]:
    """Resolves a configured tile set name to its GenTile class."""
    from world.terrain import TILE_SETS

    if name not in TILE_SETS:
        raise KeyError(f"Unknown tile set '{name}'. Known: {sorted(TILE_SETS)}")
    return TILE_SETS[name]

def clear_cache() -> None:
    _SETTINGS_CACHE.clear()
