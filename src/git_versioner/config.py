"""Configuration management for Git Versioner."""

import json
import logging
import tempfile
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".git-versioner"
CONFIG_FILE_NAME = "config.json"


class BranchConfig(BaseModel):
    """Candidate base branches, first existing one wins."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    base_branches: List[str] = Field(
        default=["main", "master"],
        description="Base branch names in order of preference",
    )

    @field_validator("base_branches")
    @classmethod
    def validate_base_branches(cls, v: List[str]) -> List[str]:
        names = [name.strip() for name in v]
        if not names:
            raise ValueError("base_branches must contain at least one branch name")
        if any(not name for name in names):
            raise ValueError("base_branches must not contain blank names")
        return names


class FormatOptions(BaseModel):
    """Options for rendering the version name."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    add_local_changes_details: bool = Field(
        default=True,
        description="Append '(<files> +<additions> -<deletions>)' to -SNAPSHOT",
    )


class TimeComponentConfig(BaseModel):
    """Optional elapsed-time contribution to the version code."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    year_factor: int = Field(
        default=0,
        description="Version code points per year of history (0 disables)",
    )

    @field_validator("year_factor")
    @classmethod
    def validate_year_factor(cls, v: int) -> int:
        if v < 0:
            raise ValueError("year_factor must not be negative")
        return v


class CiConfig(BaseModel):
    """Branch name detection on CI agents with detached checkouts."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    branch_env_vars: List[str] = Field(
        default=[],
        description="Environment variables holding the branch name, checked in order",
    )
    prefer_environment: bool = Field(
        default=False,
        description="Ask the environment before git for the branch name",
    )


class GitConfig(BaseModel):
    """Configuration for invoking git."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    timeout: float = Field(
        default=10.0, description="Timeout for each git command in seconds"
    )

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v


class OutputConfig(BaseModel):
    """Machine readable output written by the generate command."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    output_file: Path = Field(
        default=Path("build/gitversion/gitversion.json"),
        description="JSON file written by 'generate', relative to the project",
    )


class Config(BaseModel):
    """Main configuration for Git Versioner."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    branches: BranchConfig = Field(default_factory=BranchConfig)
    format: FormatOptions = Field(default_factory=FormatOptions)
    time_component: TimeComponentConfig = Field(default_factory=TimeComponentConfig)
    ci: CiConfig = Field(default_factory=CiConfig)
    git: GitConfig = Field(default_factory=GitConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


class ConfigManager:
    """Manages configuration loading and saving."""

    DEFAULT_CONFIG_PATH = Path(CONFIG_DIR_NAME) / CONFIG_FILE_NAME

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or self.DEFAULT_CONFIG_PATH
        self._config: Optional[Config] = None

    def load(self) -> Config:
        """Load configuration from file, or the defaults if there is none."""
        if self.config_path.exists():
            try:
                with open(self.config_path, "r") as f:
                    data = json.load(f)
                self._config = Config(**data)
            except Exception as e:
                raise ValueError(f"Failed to load config from {self.config_path}: {e}")
            logger.debug(f"Loaded configuration from {self.config_path}")
        else:
            self._config = Config()

        return self._config

    def save(self, config: Optional[Config] = None) -> None:
        """Save configuration to file."""
        if config is None:
            config = self._config

        if config is None:
            raise ValueError("No configuration to save")

        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.config_path, "w") as f:
            json.dump(config.model_dump(mode="json"), f, indent=2)
            f.write("\n")

        self._config = config

    @staticmethod
    def find_config_path(start_dir: Optional[Path] = None) -> Optional[Path]:
        """Find .git-versioner/config.json by walking up the directory tree.

        Args:
            start_dir: Directory to start searching from (default: current directory)

        Returns:
            Path to config.json if found, None otherwise
        """
        current = start_dir or _safe_cwd()

        for path in [current] + list(current.parents):
            config_path = path / CONFIG_DIR_NAME / CONFIG_FILE_NAME
            if config_path.exists():
                return config_path

        return None

    @classmethod
    def create_with_backtrack(cls, start_dir: Optional[Path] = None) -> "ConfigManager":
        """Create ConfigManager by finding config through directory backtracking.

        Falls back to ``<start_dir>/.git-versioner/config.json`` when no
        config exists yet.
        """
        config_path = cls.find_config_path(start_dir)
        if config_path is None:
            start = start_dir or _safe_cwd()
            config_path = start / CONFIG_DIR_NAME / CONFIG_FILE_NAME
        return cls(config_path)


def _safe_cwd() -> Path:
    try:
        return Path.cwd()
    except (FileNotFoundError, OSError):
        # Working directory deleted
        return Path(tempfile.gettempdir())
