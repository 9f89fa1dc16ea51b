"""Runtime settings for the calculator front end."""

import os
from dataclasses import dataclass

DEFAULT_X_MIN = -10.0
DEFAULT_X_MAX = 10.0
DEFAULT_Y_MIN = -10.0
DEFAULT_Y_MAX = 10.0
DEFAULT_SAMPLES = 100
DEFAULT_HISTORY_LIMIT = 100


def _env_log_level():
    return os.environ.get("CALC_LOG_LEVEL", "WARNING").upper()


@dataclass
class Settings:
    x_min: float = DEFAULT_X_MIN
    x_max: float = DEFAULT_X_MAX
    y_min: float = DEFAULT_Y_MIN
    y_max: float = DEFAULT_Y_MAX
    samples: int = DEFAULT_SAMPLES  # points sampled per plot
    history_limit: int = DEFAULT_HISTORY_LIMIT  # 0 keeps everything
    log_level: str = ""

    def __post_init__(self):
        if not self.log_level:
            self.log_level = _env_log_level()

    def reset(self):
        defaults = Settings(log_level=self.log_level)
        self.__dict__.update(defaults.__dict__)
