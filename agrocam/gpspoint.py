"""GPS fixes, their NMEA parsing and the distance and speed between two fixes."""

import math
import re
from dataclasses import dataclass, field

from .config import Config
from .mymath import EARTH_RADIUS_IN_MILES, convert_degrees_to_radians, convert_miles_to_feet
from .timestamp import DateTime

_UINT32 = 1 << 32
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_NMEA_PREFIX = "+CGPSINFO: "
_INVALID_COORDINATE = 99999.99


def _to_int(text):
    """Leading integer of ``text``, or 0 when there is none."""
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _to_double(text):
    """Leading decimal number of ``text``, or 0.0 when there is none."""
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(1)) if match else 0.0


def _substring(text, left, right=None):
    """Slice with unsigned bounds: negative bounds act as very large ones."""
    length = len(text)
    left %= _UINT32
    right = length if right is None else right % _UINT32
    if left > right:
        left, right = right, left
    if left >= length:
        return ""
    return text[left:min(right, length)]


def convert_nmea_to_degrees(val_str):
    """Convert an NMEA ``DDDMM.MMMMM`` value to decimal degrees."""
    period_pos = val_str.find(".")
    if period_pos < 0:
        return _INVALID_COORDINATE
    degrees = _to_double(_substring(val_str, 0, period_pos - 2))
    minutes = _to_double(_substring(val_str, period_pos - 2))
    return degrees + minutes / 60


def haversine(lat1, lng1, lat2, lng2, earth_radius):
    """Great-circle distance between two points, in the unit of ``earth_radius``."""
    lat_delta = convert_degrees_to_radians(lat2 - lat1)
    lng_delta = convert_degrees_to_radians(lng2 - lng1)
    lat1_rad = convert_degrees_to_radians(lat1)
    lat2_rad = convert_degrees_to_radians(lat2)

    a = math.sin(lat_delta / 2) ** 2 + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(lng_delta / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return earth_radius * c


@dataclass
class GpsPoint:
    """A position fix with its timestamp; ``is_valid`` reflects the last update."""

    datetime: DateTime = field(default_factory=DateTime)
    latitude: float = 0.0
    longitude: float = 0.0
    altitude: float = 0.0
    is_valid: bool = field(default=False, init=False)

    def __post_init__(self):
        self._validate()

    @classmethod
    def from_nmea_str(cls, text):
        """Build a point from a ``+CGPSINFO:`` response line.

        Any other text yields an invalid point at the origin.
        """
        year = month = day = hour = minute = second = 0
        lat = lng = alt = 0.0

        if text.startswith(_NMEA_PREFIX):
            start = text.find(":") + 2
            end = text.find(",", start)
            lat = convert_nmea_to_degrees(_substring(text, start, end))

            start = end + 1
            end = text.find(",", start)
            if _substring(text, start, end) == "S":
                lat = -lat

            start = end + 1
            end = text.find(",", start)
            lng = convert_nmea_to_degrees(_substring(text, start, end))

            start = end + 1
            end = text.find(",", start)
            if _substring(text, start, end) == "W":
                lng = -lng

            start = end + 1
            end = text.find(",", start)
            ddmmyy = _substring(text, start, end)
            day = _to_int(_substring(ddmmyy, 0, 2))
            month = _to_int(_substring(ddmmyy, 2, 4))
            year = _to_int(_substring(ddmmyy, 4)) + 2000

            start = end + 1
            end = text.find(".", start)
            hhmmss = _substring(text, start, end)
            hour = _to_int(_substring(hhmmss, 0, 2))
            minute = _to_int(_substring(hhmmss, 2, 4))
            second = _to_int(_substring(hhmmss, 4))

            start = end + 3
            end = text.find(",", start)
            alt = _to_double(_substring(text, start, end))

        return cls(DateTime(year, month, day, hour, minute, second), lat, lng, alt)

    def copy(self, pt):
        """Take over the fields of ``pt`` and return whether the result is valid."""
        d = pt.datetime
        self.datetime.set(d.year, d.month, d.day, d.hour, d.minute, d.second)
        self.latitude = pt.latitude
        self.longitude = pt.longitude
        self.altitude = pt.altitude
        return self._validate()

    def to_string(self):
        return (
            f"Date/Time: {self.datetime.to_date_time_string()}, "
            f"Latitude: {self.latitude:.6f}, "
            f"Longitude: {self.longitude:.6f}, "
            f"Altitude: {self.altitude:.6f}"
        )

    def distance_in_miles(self, other):
        """Great-circle distance to ``other``; 0 if either point is invalid."""
        return GpsCalculator(self, other).distance_in_miles

    def serialize(self):
        """Encode as ``y,m,d,h,m,s,lat,lng,alt``."""
        d = self.datetime
        return (
            f"{d.year},{d.month},{d.day},{d.hour},{d.minute},{d.second},"
            f"{self.latitude:.6f},{self.longitude:.6f},{self.altitude:.6f}"
        )

    def deserialize(self, data):
        """Load fields from :meth:`serialize` output and return validity.

        Raises ValueError when ``data`` has fewer than nine fields.
        """
        parts = data.split(",", 8)
        if len(parts) < 9:
            raise ValueError(f"expected 9 comma separated fields, got {len(parts)}")
        year, month, day, hour, minute, second = (_to_int(p) for p in parts[:6])
        lat, lng, alt = (_to_double(p) for p in parts[6:])

        self.datetime.set(year, month, day, hour, minute, second)
        self.latitude = lat
        self.longitude = lng
        self.altitude = alt
        return self._validate()

    def _validate(self):
        self.is_valid = (
            self.datetime.is_valid
            and -90 <= self.latitude <= 90
            and -180 <= self.longitude <= 180
        )
        return self.is_valid


class GpsCalculator:
    """Distance, elapsed time and speed between two fixes, plus a refresh period."""

    def __init__(self, pt1, pt2):
        self.is_valid = False
        self.distance_in_miles = 0.0
        self.distance_in_feet = 0.0
        self.time_diff_in_seconds = 0.0
        self.time_diff_in_hours = 0.0
        self.velocity_in_feet_per_second = 0.0
        self.velocity_in_miles_per_hour = 0.0

        if pt1.is_valid and pt2.is_valid:
            self.distance_in_miles = haversine(
                pt1.latitude, pt1.longitude, pt2.latitude, pt2.longitude, EARTH_RADIUS_IN_MILES
            )
            self.distance_in_feet = convert_miles_to_feet(self.distance_in_miles)

            self.time_diff_in_seconds = float(pt1.datetime.diff_in_seconds(pt2.datetime))
            self.time_diff_in_hours = self.time_diff_in_seconds / (60 * 60)

            if self.time_diff_in_seconds != 0:
                self.velocity_in_feet_per_second = self.distance_in_feet / self.time_diff_in_seconds
            if self.time_diff_in_hours != 0:
                self.velocity_in_miles_per_hour = self.distance_in_miles / self.time_diff_in_hours

            self.is_valid = True

        self.recommended_gps_refresh_period_sec = self._recommend_period()

    def _recommend_period(self):
        default = Config.gps_refresh_period_default_sec
        ideal = Config.gps_ideal_distance_between_points_feet

        # Compensate for the time spent collecting points; the period is kept in
        # 32-bit unsigned arithmetic, so a large overhead wraps to a huge value.
        overhead = int(self.time_diff_in_seconds - default) % _UINT32
        period = float((default - overhead) % _UINT32)

        if self.distance_in_feet > ideal and self.velocity_in_feet_per_second > 0:
            period = ideal / self.velocity_in_feet_per_second

        return float(min(max(period, Config.gps_refresh_period_smallest_sec), default))

    def to_string(self):
        return (
            f"Distance: {self.distance_in_miles:.4f}mi = {self.distance_in_feet:.4f}ft, "
            f"Velocity: {self.velocity_in_miles_per_hour:.4f}mph = "
            f"{self.velocity_in_feet_per_second:.4f}ft/s, "
            f"Recommended GPS Period: {self.recommended_gps_refresh_period_sec:.2f}s"
        )