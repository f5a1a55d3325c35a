"""Constants, environment overrides and rendering configuration."""

import logging
import os
import platform
from dataclasses import dataclass

# Monte-Carlo trial count of the CLT demo (not user-configurable)
TRIALS = 5000

# Relative tolerance for the IS-LM denominator b*k + h*(1-c)
DEGENERACY_TOLERANCE = 1e-9

# Plot range floors of the IS-LM chart
MIN_INCOME_AXIS = 1000.0
MIN_RATE_AXIS = 10.0
AXIS_PADDING = 1.5

MACOS_FONT_FAMILY = "Hiragino Kaku Gothic ProN"
DEFAULT_FONT_FAMILY = "Arial, sans-serif"

PAGE_LAYOUT = "wide"

LOG_LEVEL_ENV = "ECONLAB_LOG_LEVEL"
SEED_ENV = "ECONLAB_SEED"


def configure_logging(level=None):
    """Install a basic handler once; level from ECONLAB_LOG_LEVEL by default"""
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "WARNING")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root = logging.getLogger("econlab")
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        root.addHandler(handler)
    return root


def seed_from_env(default=None):
    """Read the CLT seed from ECONLAB_SEED, ignoring values that are not integers"""
    raw = os.environ.get(SEED_ENV)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logging.getLogger(__name__).warning(
            "Ignoring non-integer %s=%r", SEED_ENV, raw
        )
        return default


@dataclass(frozen=True)
class RenderConfig:
    """Presentation settings handed to every view renderer.

    Replaces process-wide plotting state: each render call receives the
    configuration it should use instead of mutating a global.
    """

    font_family: str = DEFAULT_FONT_FAMILY
    height: int = 450
    template: str = "plotly_white"
    is_color: str = "blue"
    lm_color: str = "red"
    point_color: str = "black"
    histogram_color: str = "lightblue"
    normal_color: str = "#E7553C"
    line_width: int = 3

    @classmethod
    def for_platform(cls, system=None, **overrides):
        """Pick a CJK-capable font on macOS, the default family elsewhere"""
        if system is None:
            system = platform.system()
        if system == "Darwin":
            overrides.setdefault("font_family", MACOS_FONT_FAMILY)
        return cls(**overrides)
