"""Unit conversions and constants used by the GPS calculations."""

import math

EARTH_RADIUS_IN_MILES = 3958.8


def convert_degrees_to_radians(degrees):
    """Convert an angle in degrees to radians."""
    return degrees * math.pi / 180.0


def convert_meters_to_miles(meters):
    """Convert metres to statute miles."""
    return meters / 1609.344


def convert_miles_to_feet(miles):
    """Convert statute miles to feet."""
    return miles * 5280.0


def convert_seconds_to_milliseconds(seconds):
    """Convert seconds to milliseconds."""
    return seconds * 1000.0


def convert_seconds_to_microseconds(seconds):
    """Convert seconds to microseconds."""
    return seconds * 1000000.0