# config_loader.py
import os

import yaml
from dotenv import find_dotenv, load_dotenv

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "config.yaml")
CONFIG_ENV_VAR = "HUFFZIP_CONFIG"


def _read_yaml(config_path):
    with open(config_path, "r") as f:
        config = yaml.safe_load(f)
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")
    return config


def load_config(config_path=None):
    """
    Loads the YAML configuration, merged over the packaged defaults.

    The file is taken from config_path, else from the HUFFZIP_CONFIG
    environment variable (a .env file is honoured), else the defaults
    are returned as they are.
    """
    load_dotenv(find_dotenv(usecwd=True))
    config = _read_yaml(DEFAULT_CONFIG_PATH)

    config_path = config_path or os.getenv(CONFIG_ENV_VAR)
    if not config_path:
        return config

    for section, values in _read_yaml(config_path).items():
        # an empty section ("cli:") loads as None and keeps the defaults
        if values is None:
            continue
        if isinstance(values, dict) and isinstance(config.get(section), dict):
            config[section].update(values)
        else:
            config[section] = values
    return config
