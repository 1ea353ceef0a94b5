"""Time left until the next daily wake-up."""

import re

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_SECONDS_PER_DAY = 24 * 3600
# Seconds spent between reading the clock and actually going to sleep.
_SLEEP_OVERHEAD_SEC = 27


def _to_int(text):
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def calcul_sleep_ms(datetime_text, target_hour, target_minute):
    """Milliseconds from ``yyyy-mm-dd hh:mm:ss`` until the next ``target_hour:target_minute``.

    Raises ValueError when the text is too short to hold a date and time.
    """
    if len(datetime_text) < 19:
        raise ValueError(f"datetime text too short: {datetime_text!r}")

    hour = _to_int(datetime_text[11:13])
    minute = _to_int(datetime_text[14:16])
    second = _to_int(datetime_text[17:19])

    now_sec = hour * 3600 + minute * 60 + second + _SLEEP_OVERHEAD_SEC
    target_sec = target_hour * 3600 + target_minute * 60

    if now_sec >= target_sec:
        seconds_to_sleep = _SECONDS_PER_DAY - now_sec + target_sec
    else:
        seconds_to_sleep = target_sec - now_sec
    return seconds_to_sleep * 1000