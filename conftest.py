from datetime import datetime, timezone

import pytest

from huewake.forecast import ForecastSample


class FakeBridge:
    """Mimics the part of phue.Bridge the wake up routine uses."""

    def __init__(self, groups, lights):
        self.groups_data = groups
        self.lights_data = lights
        self.calls = []
        self.refuse = set()  # (light_id, parameter) pairs answering error 201.

    def get_group(self):
        return self.groups_data

    def get_light(self, light_id=None):
        if light_id is None:
            return self.lights_data
        return self.lights_data[str(light_id)]

    def set_light(self, light_id, parameter, value=None, transitiontime=None):
        self.calls.append((light_id, parameter, value))
        if (light_id, parameter) in self.refuse:
            return [
                [
                    {
                        "error": {
                            "type": 201,
                            "address": f"/lights/{light_id}/state/{parameter}",
                            "description": f"parameter, {parameter}, is not "
                            "modifiable. Device is set to off.",
                        }
                    }
                ]
            ]
        self.lights_data[str(light_id)]["state"][parameter] = value
        return [[{"success": {f"/lights/{light_id}/state/{parameter}": value}}]]

    def values(self, light_id, parameter):
        return [
            value
            for called_id, called_parameter, value in self.calls
            if called_id == light_id and called_parameter == parameter
        ]


@pytest.fixture
def bridge():
    return FakeBridge(
        groups={
            "1": {"name": "Bedroom", "lights": ["1", "2", "9"]},
            "2": {"name": "Kitchen", "lights": ["3"]},
        },
        lights={
            "1": {
                "name": "Drawers",
                "state": {"on": False, "bri": 254, "xy": [0.3227, 0.329]},
            },
            "2": {
                "name": "Lamp",
                "state": {"on": True, "bri": 120, "xy": [0.5, 0.4]},
            },
            "3": {
                "name": "Fridge",
                "state": {"on": False, "bri": 1, "xy": [0.3, 0.3]},
            },
        },
    )


def _sample(hour, temperature=10.0, precipitation=0.0):
    return ForecastSample(
        datetime(2026, 10, 19, hour, 0, tzinfo=timezone.utc),
        temperature,
        precipitation,
    )


@pytest.fixture
def at():
    """Build a forecast sample for today at the given hour."""
    return _sample

