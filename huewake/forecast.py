"""Fetch an hourly weather forecast from OpenWeatherMap."""

import logging
from datetime import datetime, time, timedelta, timezone
from typing import NamedTuple

import requests


logger = logging.getLogger(__name__)

FORECAST_URL = "https://api.openweathermap.org/data/2.5/forecast"
TIMEOUT = 10  # in seconds.


class ForecastError(Exception):
    """The weather provider could not give a forecast."""


class ForecastSample(NamedTuple):
    time: datetime  # Local time at the forecast location.
    temperature: float  # in °C, whatever units were asked for.
    precipitation: float  # in mm, over the sample period.


def _precipitation(entry):
    for kind in ("rain", "snow"):
        volume = entry.get(kind, {}).get("3h")
        if volume is not None:
            return float(volume)
    return 0.0


def to_celsius(temperature, units):
    """OpenWeatherMap gives °C for metric, °F for imperial, else Kelvin."""
    if units == "metric":
        return temperature
    if units == "imperial":
        return (temperature - 32) * 5 / 9
    return temperature - 273.15


def parse_forecast(payload, days=1, tz=None, now=None, units="metric"):
    """Turn an OpenWeatherMap /forecast payload into ForecastSamples.

    Only samples before midnight at the end of `days` local days are kept,
    sorted chronologically.
    """
    try:
        shift = payload.get("city", {}).get("timezone")
        if shift is not None:
            tz = timezone(timedelta(seconds=shift))
        tz = tz or timezone.utc
        if now is None:
            now = datetime.now(tz)
        end = datetime.combine(now.astimezone(tz).date(), time(), tz) + timedelta(
            days=days
        )
        samples = []
        for entry in payload["list"]:
            sample = ForecastSample(
                time=datetime.fromtimestamp(entry["dt"], tz),
                temperature=to_celsius(float(entry["main"]["temp"]), units),
                precipitation=_precipitation(entry),
            )
            if sample.time < end:
                samples.append(sample)
    except (AttributeError, KeyError, TypeError, ValueError) as err:
        raise ForecastError(f"Unexpected forecast payload: {err!r}") from err
    return sorted(samples)


def get_forecast(
    api_key,
    location,
    units="metric",
    country_code="gb",
    days=1,
    session=requests,
    tz=None,
):
    """Get the forecast samples for the given location."""
    params = {"q": f"{location},{country_code}", "units": units, "appid": api_key}
    logger.debug("Fetching forecast for %s", params["q"])
    try:
        response = session.get(FORECAST_URL, params=params, timeout=TIMEOUT)
        response.raise_for_status()
        payload = response.json()
    except (requests.RequestException, ValueError) as err:
        raise ForecastError(f"Cannot fetch forecast for {location}: {err}") from err
    samples = parse_forecast(payload, days=days, tz=tz, units=units)
    logger.info("Got %d forecast samples for %s", len(samples), location)
    return samples
