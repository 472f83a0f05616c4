"""Settings, read once from the environment (and an optional .env file)."""

import os
from typing import NamedTuple, Optional

from dotenv import load_dotenv

from huewake.colors import DEFAULT_RAIN_THRESHOLD
from huewake.ramp import DEFAULT_RAMP_DURATION


DEFAULT_HOLD = 60 * 60  # in seconds.


class ConfigurationError(Exception):
    pass


class Settings(NamedTuple):
    hue_ip: str
    hue_username: str
    owm_api_key: str
    city: str = "Edinburgh"
    country: str = "gb"
    units: str = "metric"
    group: str = "Bedroom"
    display_light: str = "Drawers"
    rain_threshold: float = DEFAULT_RAIN_THRESHOLD
    ramp_duration: float = DEFAULT_RAMP_DURATION
    hold: float = DEFAULT_HOLD
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls, environ=None):
        environ = os.environ if environ is None else environ
        missing = [
            name
            for name in ("HUE_IP", "HUE_USERNAME", "OWM_API_KEY")
            if not environ.get(name)
        ]
        if missing:
            raise ConfigurationError(
                f"Missing environment variable(s): {', '.join(missing)}"
            )

        def number(name, default):
            try:
                return float(environ.get(name, default))
            except ValueError:
                raise ConfigurationError(
                    f"{name} should be a number, not {environ[name]!r}"
                ) from None

        return cls(
            hue_ip=environ["HUE_IP"],
            hue_username=environ["HUE_USERNAME"],
            owm_api_key=environ["OWM_API_KEY"],
            city=environ.get("WAKEUP_CITY", cls._field_defaults["city"]),
            country=environ.get("WAKEUP_COUNTRY", cls._field_defaults["country"]),
            units=environ.get("WAKEUP_UNITS", cls._field_defaults["units"]),
            group=environ.get("WAKEUP_GROUP", cls._field_defaults["group"]),
            display_light=environ.get(
                "WAKEUP_DISPLAY_LIGHT", cls._field_defaults["display_light"]
            ),
            rain_threshold=number("WAKEUP_RAIN_THRESHOLD", DEFAULT_RAIN_THRESHOLD),
            ramp_duration=number("WAKEUP_RAMP_SECONDS", DEFAULT_RAMP_DURATION),
            hold=number("WAKEUP_HOLD_SECONDS", DEFAULT_HOLD),
            log_file=environ.get("WAKEUP_LOG_FILE") or None,
        )


def load_settings(dotenv_path=None):
    """Read settings, letting a .env file fill the environment first."""
    load_dotenv(dotenv_path)
    return Settings.from_env()
