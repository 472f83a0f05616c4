"""Access the lights of a Hue room through the bridge."""

import logging

from phue import Bridge

from huewake.colors import RGBColor
from huewake.utils import clamp, rgb_to_xy, xy_to_rgb


logger = logging.getLogger(__name__)

# Hue API error type for "parameter is not modifiable", typically when
# changing the state of a light which is powered off.
PARAMETER_NOT_MODIFIABLE = 201
MIN_HUE_BRIGHTNESS = 1
MAX_HUE_BRIGHTNESS = 254


class HueError(Exception):
    """The bridge refused a request."""

    def __init__(self, description, error_type=None):
        super().__init__(description)
        self.error_type = error_type


class DeviceParameterUnmodifiable(HueError):
    """The light can't currently change this parameter."""


class GroupNotFound(LookupError):
    pass


def _check(response, light):
    """Raise if a bridge response carries an error."""
    if isinstance(response, dict):
        response = [response]
    for item in response or ():
        if not isinstance(item, dict) or "error" not in item:
            continue
        error = item["error"]
        description = f"{error.get('description')} for light {light}"
        if error.get("type") == PARAMETER_NOT_MODIFIABLE:
            raise DeviceParameterUnmodifiable(description, PARAMETER_NOT_MODIFIABLE)
        raise HueError(description, error.get("type"))


class HueLight:
    def __init__(self, bridge, light_id, name):
        self.bridge = bridge
        self.light_id = int(light_id)
        self.name = name

    def __repr__(self):
        return f"<HueLight {self.light_id} {self.name!r}>"

    def _state(self):
        light = self.bridge.get_light(self.light_id)
        _check(light, self)
        return light["state"]

    def _set(self, parameter, value):
        for response in self.bridge.set_light(self.light_id, parameter, value):
            _check(response, self)

    def get_on(self) -> bool:
        return self._state()["on"]

    def set_on(self, on):
        self._set("on", on)

    def get_color(self) -> RGBColor:
        """Color at full brightness: set_color only sends the chromaticity."""
        x, y = self._state().get("xy", (0, 0))
        return RGBColor(*xy_to_rgb(x, y, MAX_HUE_BRIGHTNESS))

    def set_color(self, color):
        self._set("xy", list(rgb_to_xy(*color)))

    def set_brightness(self, level):
        """Set brightness, from 0 to 255, squeezed into what Hue accepts."""
        # 0 goes out as 1 and 255 as 254, the ramp still ends at full brightness.
        self._set("bri", clamp(level, MIN_HUE_BRIGHTNESS, MAX_HUE_BRIGHTNESS))


def connect(ip, username):
    bridge = Bridge(ip, username)
    bridge.connect()
    return bridge


def group_lights(bridge, group_name):
    """List the lights of the group named group_name."""
    for group in bridge.get_group().values():
        if group["name"] == group_name:
            break
    else:
        raise GroupNotFound(f"No group named {group_name!r} on the bridge.")
    lights = bridge.get_light()
    members = []
    for light_id in group["lights"]:
        if light_id not in lights:
            logger.debug("Light %s of group %s is gone.", light_id, group_name)
            continue
        members.append(HueLight(bridge, light_id, lights[light_id]["name"]))
    return members
