"""
Difficulty loading for Harvest Dash.

Reads the per-level difficulty table from a local JSON file or an
http(s) URL. Any failure is logged and the built-in table is used
instead, so the game can always start.

Expected shape:
    {"difficulty": [{"level": 1, "spawnRate": 0.8, "timeLimit": 60, "goal": 10}, ...]}
"level" is optional and defaults to the 1-based list position.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Tuple, Union

import requests
from pydantic import BaseModel, Field, ValidationError

from harvest_dash.gameplay.level import DEFAULT_DIFFICULTY, LevelConfig

logger = logging.getLogger(__name__)

DifficultyTable = Tuple[LevelConfig, ...]


class DifficultyLoadError(Exception):
    """The difficulty source could not be read or understood."""


# Schemas
class DifficultyEntry(BaseModel):
    """One level as written in the JSON file."""

    level: Optional[int] = Field(default=None, ge=1)
    spawn_rate: float = Field(..., alias="spawnRate", gt=0)
    time_limit: float = Field(..., alias="timeLimit", gt=0)
    goal: int = Field(..., gt=0)

    class Config:
        populate_by_name = True


class DifficultyFile(BaseModel):
    """Top-level document."""

    difficulty: list[DifficultyEntry] = Field(..., min_length=1)


def parse_difficulty(data: Any) -> DifficultyTable:
    """
    Validate a decoded JSON document and convert it to LevelConfigs.
    Raises DifficultyLoadError on any schema problem.
    """
    try:
        document = DifficultyFile.model_validate(data)
    except ValidationError as e:
        raise DifficultyLoadError(f"Invalid difficulty data: {e}") from e

    return tuple(
        LevelConfig(
            level=entry.level if entry.level is not None else index,
            spawn_interval=entry.spawn_rate,
            time_limit=entry.time_limit,
            goal=entry.goal,
        )
        for index, entry in enumerate(document.difficulty, start=1)
    )


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def fetch_difficulty(source: Union[str, Path], timeout: float = 5.0) -> DifficultyTable:
    """
    Read and parse a difficulty source.
    Raises DifficultyLoadError if it cannot be read, decoded or validated.
    """
    source = str(source)

    if _is_url(source):
        try:
            response = requests.get(source, timeout=timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise DifficultyLoadError(f"Failed to fetch {source}: {e}") from e
        except ValueError as e:
            raise DifficultyLoadError(f"Response from {source} is not JSON: {e}") from e
    else:
        try:
            text = Path(source).read_text(encoding="utf-8")
        except OSError as e:
            raise DifficultyLoadError(f"Failed to read {source}: {e}") from e
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise DifficultyLoadError(f"{source} is not valid JSON: {e}") from e

    return parse_difficulty(data)


def load_difficulty(
    source: Optional[Union[str, Path]] = None,
    timeout: float = 5.0
) -> DifficultyTable:
    """
    Resolve the difficulty table before the first frame.
    Never raises: falls back to DEFAULT_DIFFICULTY and logs why.
    """
    if source is None:
        logger.info("No difficulty source configured, using defaults")
        return DEFAULT_DIFFICULTY

    try:
        table = fetch_difficulty(source, timeout=timeout)
    except DifficultyLoadError as e:
        logger.warning(f"Using default difficulty settings: {e}")
        return DEFAULT_DIFFICULTY

    logger.info(f"Loaded difficulty for {len(table)} level(s) from {source}")
    return table
