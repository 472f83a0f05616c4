"""Pick wake-up colors from a weather forecast.

Every light of the room gets one of two wake palettes depending on whether
rain is expected before the end of the working day, except the display light
which acts like a thermometer: the warmer it is outside, the redder it gets.
"""

import logging
from typing import NamedTuple

from huewake.utils import clamp, interpolate


logger = logging.getLogger(__name__)

COLDEST = -6  # in °C, and below: pure blue.
HOTTEST = 15  # in °C, and above: pure red.
WORKDAY_CUTOFF_HOUR = 15  # Forecasts from 3PM on don't matter for the morning.
DEFAULT_RAIN_THRESHOLD = 3  # in mm of precipitation.


class RGBColor(NamedTuple):
    red: int
    green: int
    blue: int


DEFAULT_WAKE_COLOR = RGBColor(255, 200, 200)
RAIN_WAKE_COLOR = RGBColor(50, 50, 255)


def color_for_temperature(temperature) -> RGBColor:
    """Maps celcius degrees from -6°C → 15°C to a blue → red gradient.

    Gives: -6°C -> (0, 0, 255)
           10°C -> (194, 0, 61)
           15°C -> (255, 0, 0)
    """
    temperature = clamp(temperature, COLDEST, HOTTEST)
    scale = temperature / (HOTTEST - COLDEST) - COLDEST / (HOTTEST - COLDEST)
    return RGBColor(
        round(interpolate(scale, 0, 255)), 0, round(interpolate(scale, 255, 0))
    )


def rain_expected_before_workday(samples, volume_threshold) -> bool:
    """Tell if any forecast sample before 3PM brings enough rain.

    samples have to be in chronological order: the first sample at or after
    the cutoff hour ends the scan.
    """
    for sample in samples:
        if sample.time.hour >= WORKDAY_CUTOFF_HOUR:
            return False
        if sample.precipitation >= volume_threshold:
            logger.debug(
                "%.1fmm of precipitation expected at %s",
                sample.precipitation,
                sample.time.strftime("%H:%M"),
            )
            return True
    return False


def wake_color(samples, volume_threshold=DEFAULT_RAIN_THRESHOLD) -> RGBColor:
    if rain_expected_before_workday(samples, volume_threshold):
        logger.info("Detected rain, setting wakeup color")
        return RAIN_WAKE_COLOR
    return DEFAULT_WAKE_COLOR


def display_color(samples, fallback) -> RGBColor:
    """Color of the display light, from the nearest forecast sample."""
    if not samples:
        logger.info("No forecast, display light uses the wake color.")
        return fallback
    return color_for_temperature(samples[0].temperature)


def choose_colors(light_names, display_light, samples, volume_threshold):
    """Give the color each light (by name) should wake up with."""
    palette = wake_color(samples, volume_threshold)
    colors = {}
    for name in light_names:
        if name == display_light:
            colors[name] = display_color(samples, palette)
        else:
            colors[name] = palette
    return colors
