"""Calendar date and time as reported by the modem or the GPS receiver."""

from dataclasses import dataclass, field

_SECONDS_PER_DAY = 86400
_MONTH_DAYS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)
_MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
_INVALID = "Invalid Date"


def _is_leap(year):
    return year > 0 and year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


@dataclass
class DateTime:
    """A date and time with a validity flag refreshed on every assignment."""

    year: int = 0
    month: int = 0
    day: int = 0
    hour: int = 0
    minute: int = 0
    second: int = 0
    is_valid: bool = field(default=False, init=False)

    def __post_init__(self):
        self._validate()

    def set(self, year, month, day, hour, minute, second):
        """Assign all fields and return whether the result is a valid date."""
        self.year = year
        self.month = month
        self.day = day
        self.hour = hour
        self.minute = minute
        self.second = second
        return self._validate()

    def to_seconds(self):
        """Seconds since 1970-01-01 00:00:00 for this date and time."""
        # Each calendar field is held in a single byte, so the year offset wraps at 256.
        year_offset = (self.year - 1970) & 0xFF
        month = self.month & 0xFF
        day = self.day & 0xFF

        seconds = year_offset * 365 * _SECONDS_PER_DAY
        seconds += sum(_SECONDS_PER_DAY for y in range(year_offset) if _is_leap(1970 + y))

        leap = _is_leap(1970 + year_offset)
        for m in range(1, min(month, 13)):
            days = 29 if m == 2 and leap else _MONTH_DAYS[m - 1]
            seconds += days * _SECONDS_PER_DAY

        seconds += (day - 1) * _SECONDS_PER_DAY
        seconds += (self.hour & 0xFF) * 3600
        seconds += (self.minute & 0xFF) * 60
        seconds += self.second & 0xFF
        return seconds

    def diff_in_seconds(self, ref):
        """Seconds from ``ref`` to this date and time."""
        return self.to_seconds() - ref.to_seconds()

    def to_date_string(self):
        if not self.is_valid:
            return _INVALID
        return f"{self.month_string()} {self.day}, {self.year}"

    def to_time_string(self):
        if not self.is_valid:
            return _INVALID
        h = self.hour if self.hour <= 12 else self.hour - 12
        am_pm = " AM" if self.hour < 12 else " PM"
        return f"{h}:{self.minute}:{self.second}{am_pm}"

    def to_date_time_string(self):
        if not self.is_valid:
            return _INVALID
        return f"{self.to_date_string()} {self.to_time_string()}"

    def to_timestamp_string(self):
        if not self.is_valid:
            return _INVALID
        return (
            f"{self.year}-{self.month}-{self.day} "
            f"{self.hour}:{self.minute}:{self.second}"
        )

    def month_string(self):
        if 1 <= self.month <= 12:
            return _MONTH_NAMES[self.month - 1]
        return "Invalid Month"

    def _validate(self):
        valid = 1 <= self.month <= 12 and 1 <= self.day <= 31
        max_feb_days = 29 if self.year % 4 == 0 else 28
        if self.month == 2 and self.day > max_feb_days:
            valid = False
        if self.month in (4, 6, 9, 11) and self.day > 30:
            valid = False
        self.is_valid = valid
        return valid