"""YAML config loading with env var expansion."""

import logging
import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import PubResolveConfig

logger = logging.getLogger(__name__)

PROJECT_CONFIG_NAME = "pubresolve.yaml"
USER_CONFIG_PATH = Path(".pubresolve") / "config.yaml"


def config_search_paths(
    cli_path: str | None = None, cwd: Path | None = None, home: Path | None = None
) -> list[Path]:
    """Candidate config files, highest precedence first.

    An explicit ``--config`` path is the only candidate when given; it must
    exist. Otherwise the project file in ``cwd`` wins over the user file
    under ``home``.
    """
    if cli_path:
        path = Path(cli_path)
        if not path.exists():
            raise ValueError(f"Config file not found: {cli_path}")
        return [path]
    cwd = cwd if cwd is not None else Path.cwd()
    home = home if home is not None else Path.home()
    return [cwd / PROJECT_CONFIG_NAME, home / USER_CONFIG_PATH]


def load_config(
    cli_path: str | None = None, search_paths: list[Path] | None = None
) -> PubResolveConfig:
    """Load the first non-empty config file, falling back to defaults."""
    if search_paths is None:
        search_paths = config_search_paths(cli_path)

    for path in search_paths:
        raw = _read_yaml(path)
        if raw is None:
            continue
        if not isinstance(raw, dict):
            raise ValueError(f"Invalid config in {path}: expected a mapping")
        try:
            config = PubResolveConfig(**_expand_env_vars(raw))
        except ValidationError as e:
            raise ValueError(f"Invalid config in {path}: {e}") from e
        logger.debug("loaded config from %s", path)
        return config

    return PubResolveConfig()


def _read_yaml(path: Path) -> object:
    if not path.is_file():
        return None
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise ValueError(f"Cannot read config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `pubresolve config init`
DEFAULT_CONFIG_TEMPLATE = """\
# pubresolve.yaml

# Publish record file, relative to the project directory
# (or to the document's directory when publishing a single document)
record_file: "_publish.yml"

# Render before publishing; `--no-render` overrides this per invocation
render: true

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
