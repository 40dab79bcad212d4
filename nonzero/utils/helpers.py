"""Helper utility functions."""

import uuid
import yaml
from pathlib import Path
from typing import Dict, Any, Optional

from nonzero.utils.exceptions import ConfigurationError
from nonzero.utils.validators import Settings, validate_request

DEFAULT_CONFIG_PATH = "config/config.yaml"


def generate_id() -> str:
    """Generate a unique task/entry ID."""
    return str(uuid.uuid4())


def find_config_file(config_path: str = DEFAULT_CONFIG_PATH) -> Path:
    """
    Locate a config file.
    Relative paths are searched from the current directory upwards, then
    relative to the package root.
    """
    config_file = Path(config_path)
    if config_file.is_absolute() or config_file.exists():
        return config_file

    current = Path.cwd()
    # Check up to 5 levels up
    for _ in range(5):
        potential_config = current / config_path
        if potential_config.exists():
            return potential_config
        parent = current.parent
        if parent == current:  # Reached filesystem root
            break
        current = parent

    project_root = Path(__file__).resolve().parent.parent.parent
    return project_root / config_path


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    """Load configuration from a YAML file."""
    config_file = find_config_file(config_path)
    if not config_file.exists():
        raise ConfigurationError(
            f"Config file not found: {config_path}",
            error_code="CONFIG_NOT_FOUND",
            details={"searched_from": str(Path.cwd()), "tried": str(config_file)}
        )

    with open(config_file, 'r') as f:
        try:
            config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in {config_file}",
                error_code="CONFIG_INVALID",
                details={"error": str(e)}
            )
    return config or {}


def load_settings(config_path: Optional[str] = None, config: Optional[Dict[str, Any]] = None) -> Settings:
    """
    Build validated Settings from the ``analytics`` and ``logging`` sections.

    Pass ``config`` to skip reading the file.
    """
    if config is None:
        config = load_config(config_path or DEFAULT_CONFIG_PATH)

    analytics = config.get('analytics') or {}
    logging_config = config.get('logging') or {}
    data = {}
    if 'day_score_criteria' in analytics:
        data['day_score_criteria'] = analytics['day_score_criteria']
    if 'level' in logging_config:
        data['log_level'] = logging_config['level']
    if 'file' in logging_config:
        data['log_file'] = logging_config['file']
    return validate_request(data, Settings)
