"""
Gameboard — gameboard/config.py
Layout schemas and TOML loaders powered by Pydantic.
=============================================================================================
Version:     0.2
Stack:       Python 3.11+ | Pydantic v2 | tomllib
Status:      Validation layer for board geometry and layout files.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Annotated, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, PositiveInt, ValidationError, model_validator

from gameboard.errors import ConfigError

ColorChannel = Annotated[int, Field(ge=0, le=255)]

# ================================================================================
# SCHEMAS
# ================================================================================

class BoardDef(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    rows: PositiveInt
    columns: PositiveInt
    cell_width: PositiveInt = 1
    cell_height: PositiveInt = 1
    border: bool = False
    default_content: Optional[str] = None
    origin: Optional[Tuple[NonNegativeInt, NonNegativeInt]] = None

    @model_validator(mode="after")
    def _frame_fits(self) -> "BoardDef":
        # The frame of a bordered board sits one column/row before the origin.
        if self.border and self.origin is not None and min(self.origin) < 1:
            raise ValueError("a bordered board needs an origin of at least (1, 1) for its frame")
        return self

    @property
    def resolved_origin(self) -> Tuple[int, int]:
        if self.origin is not None:
            return self.origin
        return (1, 1) if self.border else (0, 0)


class CursorDef(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    row: NonNegativeInt = 0
    col: NonNegativeInt = 0
    color: Tuple[ColorChannel, ColorChannel, ColorChannel] = (0, 0, 200)
    wrap_around: bool = True


class InfoDef(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    size: PositiveInt
    layout: Literal["left", "right", "top", "bottom"] = "right"
    lines: List[str] = Field(default_factory=list)


class LayoutDef(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    board: BoardDef
    cursor: Optional[CursorDef] = None
    info: Optional[InfoDef] = None


# ================================================================================
# LOADERS
# ================================================================================

_LAYOUT_CACHE: Dict[str, LayoutDef] = {}

DATA_DIR = Path(__file__).parent.parent / "data"


def describe_validation_error(exc: ValidationError) -> str:
    """Flatten a pydantic error into one line: 'field: message; ...'."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "value"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


def validate_board(**kwargs) -> BoardDef:
    """
    Validate board geometry passed from code, raising ConfigError instead of
    ValidationError. Strict mode: "3" or 2.0 is not a row count. Layout files
    go through load_layout(), which keeps pydantic's usual coercion.
    """
    try:
        return BoardDef.model_validate(kwargs, strict=True)
    except ValidationError as exc:
        raise ConfigError(f"Invalid board geometry: {describe_validation_error(exc)}") from exc


def load_layout(path: Union[str, Path]) -> LayoutDef:
    """Loads and validates a layout definition from a TOML file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Layout definition not found: {path}")

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Malformed layout file {path}: {exc}") from exc

    try:
        return LayoutDef(**data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid layout {path}: {describe_validation_error(exc)}") from exc


def get_layout(layout_id: str) -> LayoutDef:
    """JIT loads a bundled layout from data/layouts/<layout_id>.toml."""
    if layout_id in _LAYOUT_CACHE:
        return _LAYOUT_CACHE[layout_id]

    layout = load_layout(DATA_DIR / "layouts" / f"{layout_id}.toml")
    _LAYOUT_CACHE[layout_id] = layout
    return layout
