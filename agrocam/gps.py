"""Position fixes read from the cellular module's GNSS receiver."""

import time

from .gpspoint import GpsPoint

_NO_FIX = ",,,,,,,,"


class Gps:
    """Turns on the receiver and polls it for a position."""

    def __init__(self, command_helper, sleep=time.sleep, clock=time.monotonic):
        self._cmd = command_helper
        self._sleep = sleep
        self._clock = clock
        self.location_data = ""
        self.last_gps_point = GpsPoint()

    def current_location(self, timeout=60000, is_close_session=False):
        """Poll for a fix for up to ``timeout`` ms; return whether one was read.

        The fix is stored in ``last_gps_point`` and its raw line in ``location_data``.
        """
        cmd = self._cmd
        cmd.send_command_and_wait("AT+CGPS=1,1")
        self._sleep(1.0)
        # Fallbacks for firmware that ignores the first form.
        cmd.send_command_and_wait("AT+CGPS?")
        self._sleep(0.5)
        cmd.send_command_and_wait("AT+CGPS=1")
        self._sleep(1.0)
        cmd.send_command_and_wait("AT+CGPSINFOCFG=10,31")

        is_refreshed = False
        start = self._clock()
        while (self._clock() - start) * 1000 < timeout:
            if not cmd.send_command_and_wait("AT+CGPSINFO"):
                continue
            response = cmd.last_command_response.strip()
            if not response or response.find(_NO_FIX) > 0:
                self._sleep(2.0)
                continue

            self.location_data = self._data_line(response)
            self.last_gps_point.copy(GpsPoint.from_nmea_str(self.location_data))
            is_refreshed = True
            break

        if is_close_session:
            cmd.send_command_and_wait("AT+CGPS=0")

        return is_refreshed

    @staticmethod
    def _data_line(response):
        """Text after the first newline up to the next one, or the whole response."""
        start = response.find("\n") + 1
        end = response.find("\n", start)
        if end < 0:
            end = len(response)
        return response[start:end].strip()