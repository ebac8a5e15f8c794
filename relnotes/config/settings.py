"""Configuration management for relnotes."""

import json
import os
import re
from pathlib import Path
from typing import Optional, Pattern

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..exceptions import ConfigurationError, InvalidPatternError


# Utility functions
def compile_pattern(pattern: Optional[str]) -> Optional[Pattern[str]]:
    """Compile a user supplied skip pattern.

    Args:
        pattern: Regular expression, matched case-insensitively

    Returns:
        Compiled pattern, or None when no pattern was given

    Raises:
        InvalidPatternError: If the pattern is not a valid regular expression
    """
    if not pattern:
        return None
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        raise InvalidPatternError(pattern, str(e)) from e


class FilterOptions(BaseModel):
    """Options controlling how release bodies are filtered.

    Every field is optional; an unset pattern leaves the tree untouched.
    Hyphenated names (``skip-sections``) are accepted as well as the Python
    field names.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    # Only releases published on or after this date (YYYY-MM-DD, -Nw or -Nm)
    after: Optional[str] = None
    # Sections whose heading text matches are removed with their content
    skip_sections: Optional[str] = Field(default=None, alias="skip-sections")
    # List items whose text matches are removed
    skip_lines: Optional[str] = Field(default=None, alias="skip-lines")
    # Drop headings left without content after filtering
    remove_empty_sections: bool = Field(default=False, alias="remove-empty-sections")

    @field_validator("skip_sections", "skip_lines")
    @classmethod
    def validate_pattern(cls, v):
        """Reject patterns that do not compile."""
        compile_pattern(v)
        return v or None


class Config(BaseSettings):
    """Configuration settings for relnotes."""

    model_config = SettingsConfigDict(env_prefix="RELNOTES_", case_sensitive=False)

    github_api_url: str = "https://api.github.com"
    github_token: Optional[str] = None
    cache_dir: str = os.path.join("_build", "relnotes")
    timeout: int = 60
    options: FilterOptions = FilterOptions()

    @field_validator("github_api_url")
    @classmethod
    def normalize_github_api_url(cls, v):
        """Ensure the API URL has a protocol and no trailing slash."""
        if v and not v.startswith(("http://", "https://")):
            v = f"https://{v}"
        return v.rstrip("/")

    @property
    def cache_file(self) -> Path:
        return Path(self.cache_dir) / "cache.json"


def load_json_config(config_path: str) -> dict:
    """Load configuration from JSON file.

    Args:
        config_path: Path to JSON configuration file

    Returns:
        Configuration dictionary
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Error loading config file {config_path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a JSON object")
    return data


def find_config_file() -> Optional[str]:
    """Find configuration file in common locations.

    Returns:
        Path to config file or None if not found
    """
    search_paths = [
        "relnotes.json",
        ".relnotes.json",
        "~/.relnotes.json",
        "~/.config/relnotes/config.json",
    ]

    for path_str in search_paths:
        path = Path(path_str).expanduser()
        if path.exists() and path.is_file():
            return str(path)

    return None


def get_config(config_file: Optional[str] = None) -> Config:
    """Load configuration from a JSON file and environment variables.

    An explicitly given file must be readable; a discovered one that cannot
    be loaded is ignored.

    Args:
        config_file: Optional path to JSON config file

    Returns:
        Configuration object
    """
    config_data = {}

    json_config_path = config_file or find_config_file()
    if json_config_path:
        try:
            config_data.update(load_json_config(json_config_path))
        except ConfigurationError:
            if config_file:
                raise

    # Environment variables override JSON config
    env_config = {
        "github_api_url": os.getenv("RELNOTES_GITHUB_API_URL"),
        "github_token": os.getenv("RELNOTES_GITHUB_TOKEN"),
        "cache_dir": os.getenv("RELNOTES_CACHE_DIR"),
        "timeout": os.getenv("RELNOTES_TIMEOUT"),
    }

    env_config = {k: v for k, v in env_config.items() if v is not None}
    config_data.update(env_config)

    # GITHUB_TOKEN only fills in when no token was configured
    if not config_data.get("github_token") and os.getenv("GITHUB_TOKEN"):
        config_data["github_token"] = os.getenv("GITHUB_TOKEN")

    return Config(**config_data)


def create_sample_config(path: str = "relnotes.json") -> None:
    """Create a sample configuration file.

    Args:
        path: Path where to create the sample config file
    """
    sample_config = {
        "github_api_url": "https://api.github.com",
        "github_token": "your-github-token-here",
        "cache_dir": os.path.join("_build", "relnotes"),
        "options": {
            "after": "-3m",
            "skip-sections": "Contributors to this release",
            "skip-lines": "Release v",
            "remove-empty-sections": True,
        },
    }

    with open(path, "w", encoding="utf-8") as f:
        json.dump(sample_config, f, indent=2)
