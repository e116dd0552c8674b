"""
Table settings and their JSON persistence.
"""

from __future__ import annotations
from pathlib import Path
from typing import Optional, Union
import logging

from pydantic import BaseModel, Field, ValidationError, model_validator

from holdem.core.errors import InvalidConfigurationError
from holdem.core.rules import (
    DEFAULT_BIG_BLIND, DEFAULT_BUY_IN, DEFAULT_SMALL_BLIND, MAX_PLAYERS,
)


logger = logging.getLogger(__name__)


class TableSettings(BaseModel):
    """User-adjustable table configuration."""
    small_blind: int = Field(default=DEFAULT_SMALL_BLIND, gt=0)
    big_blind: int = Field(default=DEFAULT_BIG_BLIND, gt=0)
    starting_stack: int = Field(default=DEFAULT_BUY_IN, gt=0)
    num_opponents: int = Field(default=3, ge=1, le=MAX_PLAYERS - 1)
    ai_action_delay: float = Field(default=1.0, ge=0, description="Seconds between agent actions")
    ai_bet_amount: int = Field(default=50, gt=0)
    ai_raise_amount: int = Field(default=100, gt=0)
    show_hints: bool = True

    @model_validator(mode="after")
    def check_blinds(self) -> TableSettings:
        if self.big_blind < self.small_blind:
            raise ValueError("big_blind must be at least small_blind")
        return self


class SettingsStore:
    """
    Loads and saves TableSettings as a JSON file.

    A missing file yields the defaults; a malformed one raises
    InvalidConfigurationError.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else None

    def load(self) -> TableSettings:
        if self.path is None or not self.path.exists():
            return TableSettings()

        try:
            settings = TableSettings.model_validate_json(self.path.read_text(encoding="utf-8"))
        except ValidationError as e:
            raise InvalidConfigurationError(f"Invalid settings in {self.path}: {e}") from e

        logger.info(f"Loaded table settings from {self.path}")
        return settings

    def save(self, settings: TableSettings) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(settings.model_dump_json(indent=2), encoding="utf-8")
        logger.info(f"Saved table settings to {self.path}")
