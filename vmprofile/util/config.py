# coding=utf-8
import json
import os
from typing import Dict, Optional

from vmprofile.util.constant import DEFAULT_CONFIG, DEFAULT_CONFIG_PATH, OutputType
from vmprofile.util.logging_utils import get_default_logger

logger = get_default_logger(__name__)


def load_config(path: Optional[str] = None) -> Dict:
    """Load the JSON profile config and merge it over the defaults.

    An explicitly given path must exist; the default path is optional.
    """
    config = dict(DEFAULT_CONFIG)
    config_path = path or DEFAULT_CONFIG_PATH
    if not os.path.exists(config_path):
        if path:
            raise FileNotFoundError(f"Config file not found: {path}")
        logger.debug(f"no config file at {config_path}, using defaults")
        return config

    with open(config_path, 'r', encoding='utf-8') as reader:
        user_config = json.load(reader)
    if not isinstance(user_config, dict):
        raise ValueError(f"Config file {config_path} must contain a JSON object")

    unknown_keys = set(user_config) - set(DEFAULT_CONFIG)
    if unknown_keys:
        logger.warning(f"ignoring unknown config keys: {sorted(unknown_keys)}")
    for key in DEFAULT_CONFIG:
        if key in user_config:
            config[key] = user_config[key]

    if config["output_type"] not in OutputType.choices():
        raise ValueError(f"Invalid output_type in {config_path}: {config['output_type']}")
    logger.info(f"loaded config from {config_path}")
    return config
