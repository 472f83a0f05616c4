import logging


logger = logging.getLogger(__name__)

# D65 white point, used when a color carries no light at all.
WHITE_POINT = (0.3127, 0.3290)


def clamp(value, mini, maxi):
    return max(mini, min(maxi, value))


def interpolate(alpha, mini, maxi):
    return (1 - alpha) * mini + alpha * maxi


def _gamma(channel):
    if channel > 0.04045:
        return ((channel + 0.055) / 1.055) ** 2.4
    return channel / 12.92


def _reverse_gamma(channel):
    if channel <= 0.0031308:
        return 12.92 * channel
    return 1.055 * channel ** (1 / 2.4) - 0.055


def rgb_to_xy(red, green, blue):
    """Convert an 8 bits RGB triple to the CIE xy coordinates Hue lights use.

    Uses the wide gamut conversion published by Philips for Hue bulbs.
    Brightness is not part of the result: the bridge drives it separately.
    """
    r, g, b = (_gamma(channel / 255) for channel in (red, green, blue))
    x = r * 0.664511 + g * 0.154324 + b * 0.162028
    y = r * 0.283881 + g * 0.668433 + b * 0.047685
    z = r * 0.000088 + g * 0.072310 + b * 0.986039
    total = x + y + z
    if total == 0:
        return WHITE_POINT
    return round(x / total, 4), round(y / total, 4)


def xy_to_rgb(x, y, bri=254):
    """Convert CIE xy coordinates and a Hue brightness back to 8 bits RGB."""
    if y == 0:
        x, y = WHITE_POINT
    luminance = clamp(bri, 0, 255) / 255
    big_x = (luminance / y) * x
    big_z = (luminance / y) * (1 - x - y)
    channels = [
        big_x * 1.656492 - luminance * 0.354851 - big_z * 0.255038,
        -big_x * 0.707196 + luminance * 1.655397 + big_z * 0.036152,
        big_x * 0.051713 - luminance * 0.121364 + big_z * 1.011530,
    ]
    # Scale down linear values so the chromaticity survives the gamma.
    highest = max(channels)
    if highest > 1:
        channels = [channel / highest for channel in channels]
    channels = [_reverse_gamma(clamp(channel, 0, 1)) for channel in channels]
    return tuple(int(round(clamp(channel, 0, 1) * 255)) for channel in channels)
