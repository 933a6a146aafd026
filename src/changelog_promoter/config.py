"""Runtime configuration for the changelog promoter.

Every threshold and external binary name lives here so tests and operators
can change them without touching extraction logic. Configuration can be
loaded from a YAML file:

    # promoter.yaml
    chglog_binary: /opt/bin/git-chglog
    diff_max_chars: 8000
    command_timeout: 30

The file is taken from the explicit path argument or from the
CHANGELOG_PROMOTER_CONFIG environment variable.
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

CONFIG_ENV_VAR = "CHANGELOG_PROMOTER_CONFIG"


class PromoterConfig(BaseModel):
    """Configuration for source adapters.

    Attributes:
        chglog_binary: Name or path of the git-chglog executable
        git_binary: Name or path of the git executable
        changelog_filename: Static changelog file, relative to the repo root
        readme_filename: README file, relative to the repo root
        diff_max_chars: Code diffs longer than this are reduced
        readme_max_chars: READMEs longer than this are reduced
        readme_max_lines: Non-blank lines kept when a README is reduced
        command_timeout: Seconds before an external command is abandoned.
                         None (the default) waits forever.
    """

    chglog_binary: str = "git-chglog"
    git_binary: str = "git"
    changelog_filename: str = "CHANGELOG.md"
    readme_filename: str = "README.md"
    diff_max_chars: int = Field(5000, gt=0)
    readme_max_chars: int = Field(2000, gt=0)
    readme_max_lines: int = Field(30, gt=0)
    command_timeout: float | None = Field(None, gt=0)


def load_config(path: str | Path | None = None) -> PromoterConfig:
    """Load and validate a YAML configuration file.

    Args:
        path: Path to the YAML file. Falls back to the
              CHANGELOG_PROMOTER_CONFIG environment variable.

    Returns:
        A validated PromoterConfig. Returns defaults if no file is
        configured or the file doesn't exist.

    Raises:
        ValueError: If the YAML content is invalid or fails validation.
    """
    path = path or os.environ.get(CONFIG_ENV_VAR)
    if not path:
        return PromoterConfig()

    config_path = Path(path)
    if not config_path.exists():
        return PromoterConfig()

    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ValueError(f"Invalid promoter config in {path}: expected a mapping")

    try:
        return PromoterConfig.model_validate(raw)
    except ValidationError as exc:
        raise ValueError(f"Invalid promoter config in {path}: {exc}") from exc
