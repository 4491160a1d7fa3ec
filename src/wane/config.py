"""Configuration loader for Wane."""
import importlib.util
import logging
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "wane.config.py"

# Upper-case config variable -> option name
CONFIG_KEYS = {
    "INDENT": "indent_text",
    "FACTORY_TYPE": "factory_type",
    "INJECT": "inject_statement",
    "TEMPLATES_DIR": "templates_dir",
}


def load_config(path: Path | str | None = None) -> Dict[str, Any]:
    """
    Load configuration from a python file.

    If path is provided, loads from there.
    Otherwise, looks for wane.config.py in the current working directory.

    Returns a dictionary of option names mapped from the upper-case
    variables found in the config module.
    """
    if path is None:
        path = Path.cwd() / DEFAULT_CONFIG_FILENAME
    else:
        path = Path(path)

    if not path.exists():
        return {}

    try:
        spec = importlib.util.spec_from_file_location("wane_config", path)
        if spec is None or spec.loader is None:
            return {}

        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
    except Exception as e:
        logger.warning("Failed to load config from %s: %s", path, e)
        return {}

    config = {}
    for key, option in CONFIG_KEYS.items():
        if hasattr(module, key):
            config[option] = getattr(module, key)

    if "templates_dir" in config:
        config["templates_dir"] = str(config["templates_dir"])

    return config
