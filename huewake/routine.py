"""Wake up routine: simulate a sunrise in a room, then put it back as it was."""

import logging
import time
from typing import NamedTuple

import requests

from huewake.colors import DEFAULT_RAIN_THRESHOLD, choose_colors
from huewake.config import DEFAULT_HOLD
from huewake.forecast import ForecastError, get_forecast
from huewake.lights import DeviceParameterUnmodifiable
from huewake.ramp import DEFAULT_RAMP_DURATION, produce_brightness_ramp, run_ramp


logger = logging.getLogger(__name__)


class LightState(NamedTuple):
    on: bool
    color: tuple


def fetch_forecast(settings, session=requests, tz=None):
    """Get the forecast, or an empty one if the provider fails."""
    try:
        return get_forecast(
            settings.owm_api_key,
            settings.city,
            units=settings.units,
            country_code=settings.country,
            session=session,
            tz=tz,
        )
    except ForecastError as err:
        logger.error("%s", err, exc_info=True)
        return []


class WakeUp:
    def __init__(
        self,
        lights,
        display_light=None,
        ramp_duration=DEFAULT_RAMP_DURATION,
        hold=DEFAULT_HOLD,
        rain_threshold=DEFAULT_RAIN_THRESHOLD,
        sleep=time.sleep,
    ):
        self.lights = lights
        self.display_light = display_light
        self.ramp_duration = ramp_duration
        self.hold_duration = hold
        self.rain_threshold = rain_threshold
        self.sleep = sleep

    def _attempt(self, light, action, *args):
        """Run a device call, tolerating lights refusing the change."""
        try:
            return getattr(light, action)(*args)
        except DeviceParameterUnmodifiable as err:
            logger.warning("Failed to modify device %s: %s", light.name, err)
            return None

    def snapshot(self):
        states = {}
        for light in self.lights:
            try:
                state = LightState(light.get_on(), light.get_color())
            except DeviceParameterUnmodifiable as err:
                logger.warning("Can't read state of %s: %s", light.name, err)
                continue
            logger.info(
                "Original colour of %s: %s (on=%s)", light.name, state.color, state.on
            )
            states[light.light_id] = state
        return states

    def switch_on(self):
        for light in self.lights:
            self._attempt(light, "set_on", True)

    def apply_colors(self, samples):
        colors = choose_colors(
            [light.name for light in self.lights],
            self.display_light,
            samples,
            self.rain_threshold,
        )
        for light in self.lights:
            logger.info("Setting %s to %s", light.name, colors[light.name])
            self._attempt(light, "set_color", colors[light.name])
        return colors

    def set_brightness(self, level):
        for light in self.lights:
            self._attempt(light, "set_brightness", level)

    def ramp_up(self):
        logger.info(
            "Sunrise for %d light(s) over %ss", len(self.lights), self.ramp_duration
        )
        run_ramp(
            produce_brightness_ramp(self.ramp_duration), self.set_brightness, self.sleep
        )

    def hold(self):
        logger.info("Holding full brightness for %ss", self.hold_duration)
        self.sleep(self.hold_duration)

    def restore(self, snapshot):
        for light in self.lights:
            state = snapshot.get(light.light_id)
            if state is not None:
                logger.info(
                    "Resetting original colour of %s: %s", light.name, state.color
                )
                self._attempt(light, "set_color", state.color)
            self._attempt(light, "set_on", False)

    def run(self, samples):
        snapshot = self.snapshot()
        self.switch_on()
        self.apply_colors(samples)
        self.ramp_up()
        self.hold()
        self.restore(snapshot)
        logger.info("Wake up done.")
