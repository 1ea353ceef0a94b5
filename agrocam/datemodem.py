"""Network registration check and clock reading through the cellular module."""

import time

NOT_AVAILABLE = "Non disponible"
_REGISTERED = ("+CREG: 0,1", "+CREG: 0,5")


class DateModem:
    """Reads the date and time the module keeps from the cellular network."""

    def __init__(self, command, network_timeout=15000, retry_delay=1.0, sleep=time.sleep):
        self._cmd = command
        self.network_timeout = network_timeout
        self.retry_delay = retry_delay
        self._sleep = sleep
        self.last_error = ""

    def wait_for_network(self, timeout=None):
        """Poll registration for up to ``timeout`` ms; return whether the module is registered."""
        if timeout is None:
            timeout = self.network_timeout
        start = time.monotonic()
        while (time.monotonic() - start) * 1000 < timeout:
            ok = self._cmd.send_command_and_wait("AT+CREG?")
            response = self._cmd.last_command_response
            if ok and any(state in response for state in _REGISTERED):
                return True
            self._sleep(self.retry_delay)

        self.last_error = "Réseau GSM non disponible."
        return False

    def get_time_string(self):
        """Module clock as ``yy/MM/dd,hh:mm:ss+TZ``, or ``NOT_AVAILABLE``."""
        ok = self._cmd.send_command_and_wait("AT+CCLK?")
        response = self._cmd.last_command_response

        index = response.find("+CCLK:")
        if ok and index != -1:
            start_quote = response.find('"', index)
            end_quote = response.find('"', start_quote + 1)
            if start_quote != -1 and end_quote != -1:
                return response[start_quote + 1:end_quote]

        self.last_error = "Heure non disponible."
        return NOT_AVAILABLE

    def get_datetime_string(self):
        """Module clock as ``yyyy-mm-dd hh:mm:ss``, or ``NOT_AVAILABLE``."""
        if not self.wait_for_network():
            self.last_error = "Pas de réseau"
            return NOT_AVAILABLE

        if not self._cmd.send_command_and_wait("AT+CCLK?"):
            self.last_error = "Échec AT+CCLK?"
            return NOT_AVAILABLE

        response = self._cmd.last_command_response
        start = response.find('"')
        end = response.rfind('"')
        if start == -1 or end == -1 or end <= start:
            self.last_error = "Format invalide"
            return NOT_AVAILABLE

        raw = response[start + 1:end]
        year = "20" + raw[0:2]
        month = raw[3:5]
        day = raw[6:8]
        clock = raw[9:17]
        return f"{year}-{month}-{day} {clock}"