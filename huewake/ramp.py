"""Brightness ramp simulating a sunrise."""

import logging
import time
from typing import NamedTuple


logger = logging.getLogger(__name__)

MAX_BRIGHTNESS = 255
DEFAULT_RAMP_DURATION = 30 * 60  # in seconds.


class RampStep(NamedTuple):
    level: int
    pause: float  # in seconds, to wait once level has been applied.


def produce_brightness_ramp(duration):
    """Yield the 256 brightness levels from 0 to 255, evenly spread over
    duration seconds.

    Each step carries the pause to observe after applying it. The last step
    has no pause so the whole ramp lasts exactly duration seconds.
    """
    pause = duration / MAX_BRIGHTNESS
    for level in range(MAX_BRIGHTNESS + 1):
        yield RampStep(level, pause if level < MAX_BRIGHTNESS else 0)


def run_ramp(steps, apply, sleep=time.sleep):
    """Apply each level of the ramp, pausing between them."""
    for step in steps:
        logger.debug("Increasing light level to %s", step.level)
        apply(step.level)
        if step.pause > 0:
            sleep(step.pause)
