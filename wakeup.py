"""Wake up with a sunrise.

Slowly brighten the lights of a Hue room, colored after the weather
forecast, hold them for a while, then put their colors back and switch
them off.

Better run it from a crontab, like:

    30 6 * * 1-5 python wakeup.py --group Bedroom --display-light Drawers

Bridge address, credentials and OpenWeatherMap key are read from the
environment (HUE_IP, HUE_USERNAME, OWM_API_KEY), or from a .env file.
"""
import sys
import argparse
import logging
from datetime import datetime
from logging.handlers import TimedRotatingFileHandler

import astral.sun
from astral.geocoder import lookup, database
from tabulate import tabulate

from huewake.colors import choose_colors, rain_expected_before_workday
from huewake.config import ConfigurationError, load_settings
from huewake.lights import GroupNotFound, connect, group_lights
from huewake.routine import WakeUp, fetch_forecast

logger = logging.getLogger()

TEST_RAMP = 60  # in seconds.
TEST_HOLD = 10  # in seconds.


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("--group", help="Hue group to wake up, like 'Bedroom'.")
    parser.add_argument(
        "--display-light", help="Light showing the outdoor temperature."
    )
    parser.add_argument("--city", help="City name, like 'Edinburgh'.")
    parser.add_argument("--country", help="Country code, like 'gb'.")
    parser.add_argument(
        "--rain-threshold",
        type=float,
        help="Precipitation (in mm) switching to the rainy wake color.",
    )
    parser.add_argument(
        "--ramp-duration", type=float, help="Sunrise duration, in seconds."
    )
    parser.add_argument(
        "--hold", type=float, help="Time to keep lights on after sunrise, in seconds."
    )
    parser.add_argument(
        "--test",
        help=f"Quick run: {TEST_RAMP}s sunrise and {TEST_HOLD}s hold.",
        action="store_true",
    )
    parser.add_argument(
        "--list-lights", help="List lights and exit.", action="store_true"
    )
    parser.add_argument(
        "--forecast",
        help="Show forecast and chosen colors, and exit.",
        action="store_true",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def apply_args(settings, args):
    """Let command line options override the environment."""
    overrides = {
        "group": args.group,
        "display_light": args.display_light,
        "city": args.city,
        "country": args.country,
        "rain_threshold": args.rain_threshold,
        "ramp_duration": args.ramp_duration,
        "hold": args.hold,
    }
    if args.test:
        overrides["ramp_duration"] = TEST_RAMP
        overrides["hold"] = TEST_HOLD
    return settings._replace(
        **{key: value for key, value in overrides.items() if value is not None}
    )


def setup_logging(verbose, log_file=None):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    if log_file:
        handler = TimedRotatingFileHandler(log_file, when="midnight", backupCount=7)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s")
        )
        logging.getLogger().addHandler(handler)


def list_lights(bridge):
    """List all lights by group.

    So it's easy for a human to pick a --group and a --display-light."""
    table = []
    reverse_group = {}
    for group in bridge.groups:
        for light in group.lights:
            reverse_group[light.name] = group.name
    for light in bridge.lights:
        table.append((light.name, reverse_group.get(light.name, ""), light.on))
    print(
        tabulate(
            sorted(table, key=lambda line: line[1], reverse=True),
            headers=("Light", "Group", "On"),
        )
    )


def show_forecast(samples, settings):
    """Print forecast samples, and what the lights would look like."""
    table = [
        (
            sample.time.strftime("%Y-%m-%d %H:%M"),
            sample.temperature,
            sample.precipitation,
        )
        for sample in samples
    ]
    print(tabulate(table, headers=("Time", "Temperature", "Precipitation")))
    rain = rain_expected_before_workday(samples, settings.rain_threshold)
    print(f"\nRain expected before 3PM: {'yes' if rain else 'no'}")
    colors = choose_colors(
        ["(others)", settings.display_light],
        settings.display_light,
        samples,
        settings.rain_threshold,
    )
    table = [(name, ", ".join(map(str, color))) for name, color in colors.items()]
    print(tabulate(table, headers=("Light", "RGB")))


def locate(city_name, date=None):
    """Find the city's timezone with astral, logging the day's sunrise."""
    try:
        city = lookup(city_name, database())
    except KeyError:
        logger.info("City %s unknown to astral, using forecast timezone.", city_name)
        return None

    def log_hour(when):
        return when.strftime("%H:%M")

    logger.info("Information for %s/%s", city.name, city.region)
    logger.info(f"Now: {log_hour(datetime.now(city.tzinfo))}")
    try:
        sun = astral.sun.sun(city.observer, date=date, tzinfo=city.tzinfo)
    except ValueError as err:
        # Polar days and nights have no dawn or sunrise.
        logger.info("No sunrise today in %s: %s", city.name, err)
        return city.tzinfo
    logger.info(f"Dawn: {log_hour(sun['dawn'])}")
    logger.info(f"Sunrise: {log_hour(sun['sunrise'])}")
    return city.tzinfo


def main(argv=None):
    args = parse_args(argv)
    try:
        settings = apply_args(load_settings(), args)
    except ConfigurationError as err:
        setup_logging(args.verbose)
        logger.error("%s", err)
        sys.exit(1)
    setup_logging(args.verbose, settings.log_file)
    bridge = connect(settings.hue_ip, settings.hue_username)
    if args.list_lights:
        list_lights(bridge)
        sys.exit(0)
    tz = locate(settings.city)
    samples = fetch_forecast(settings, tz=tz)
    if args.forecast:
        show_forecast(samples, settings)
        sys.exit(0)
    try:
        lights = group_lights(bridge, settings.group)
    except GroupNotFound as err:
        logger.error("%s", err)
        sys.exit(1)
    WakeUp(
        lights,
        display_light=settings.display_light,
        ramp_duration=settings.ramp_duration,
        hold=settings.hold,
        rain_threshold=settings.rain_threshold,
    ).run(samples)


if __name__ == "__main__":
    main()
