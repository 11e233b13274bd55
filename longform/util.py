import logging
import os

from configparser import ConfigParser
from typing import Optional, Union

LOGGER = logging.getLogger("longform")
DEFAULT_CONFIG_PATH = os.path.expanduser("~/.config/longform/longform.ini")


logging.basicConfig(level=logging.INFO)


def load_config(config_source: Optional[Union[str, ConfigParser]] = None):
    if not config_source:
        config_source = DEFAULT_CONFIG_PATH
    if isinstance(config_source, str):
        config = ConfigParser()
        config.read(config_source)
        return config
    elif isinstance(config_source, ConfigParser):
        return config_source
    else:
        raise ValueError("unknown config type passed to engine: ", config_source)


def balls_to_overs(balls: int) -> str:
    balls_in_over = balls % 6
    overs_completed = balls // 6
    return f"{overs_completed}.{balls_in_over}"
