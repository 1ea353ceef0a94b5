"""Power, registration and identity of the cellular module."""

import time

DEFAULT_APN = "ebouygtel.com"
_REGISTERED_STATES = ("0,1", "1,1", "0,5", "1,5")
_ON_CHECK_ATTEMPTS = 5
_ON_CHECK_DELAY = 1.0
_BOOT_ATTEMPTS = 40
_BOOT_DELAY = 0.25
_FUNCTIONALITY_TIMEOUT = 5000


class Hardware:
    """Drives the cellular module through its AT interface and power key.

    ``power_key`` is an optional callable taking a pin level (0 or 1) that
    drives the module's power key line; without it no pulses are sent.
    """

    def __init__(self, command_helper, console, is_debug=False, power_key=None, apn=DEFAULT_APN, sleep=time.sleep):
        self._cmd = command_helper
        self._console = console
        self.is_debug = is_debug
        self._power_key = power_key
        self.apn = apn
        self._sleep = sleep
        self.manufacturer = ""
        self.model = ""
        self.imei = ""

    def begin_console(self, timeout):
        return self._console.begin(timeout)

    def end_console(self):
        self._console.end()

    def begin_serial_module(self):
        return self._cmd.begin(1000)

    def end_serial_module(self):
        self._cmd.end()

    def _query(self, command):
        """Send ``command`` and return its answer, or None when it was refused."""
        if not self._cmd.send_command_and_wait(command):
            return None
        return self._cmd.last_command_response

    def init_module(self):
        """Read the module identity once and set up the data network.

        Returns False when the module does not answer or refuses an identity query.
        """
        if not self.is_module_on():
            return False

        cmd = self._cmd
        cmd.send_command_and_wait("AT+CMEE=2")

        for attribute, command in (("manufacturer", "AT+CGMI"), ("model", "AT+CGMM"), ("imei", "AT+CGSN")):
            if getattr(self, attribute) == "":
                answer = self._query(command)
                if answer is None:
                    return False
                setattr(self, attribute, answer)

        cmd.send_command_and_wait("AT+CGREG=1")
        cmd.send_command_and_wait(f'AT+CGDCONT=1,"IP","{self.apn}"')
        cmd.send_command_and_wait("AT+CGATT=1")
        cmd.send_command_and_wait("AT+CGACT=1,1")

        cmd.start_verbose()
        cmd.send_command_and_wait("AT+CREG?")
        cmd.send_command_and_wait("AT+CGATT?")
        cmd.send_command_and_wait("AT+CSQ")
        cmd.end_verbose()
        return True

    def is_module_on(self):
        """Whether the module answers ``AT`` within a few attempts."""
        for _ in range(_ON_CHECK_ATTEMPTS):
            if self._cmd.send_command_and_wait("AT"):
                return True
            self._sleep(_ON_CHECK_DELAY)
        return False

    def is_cellular_connected(self, is_config_if_not=False):
        """Whether the module is registered, at home or roaming.

        With ``is_config_if_not`` the module is powered and set up before a
        second check.
        """
        if self._cmd.send_command_and_wait("AT+CGREG?"):
            response = self._cmd.last_command_response
            if any(response.find(state) > 0 for state in _REGISTERED_STATES):
                return True

        if is_config_if_not:
            if not self.is_module_on():
                self.turn_on_module()
            self.init_module()
            return self.is_cellular_connected(False)

        return False

    def _pulse(self, first, second, hold):
        if self._power_key is None:
            return
        self._power_key(first)
        self._sleep(hold)
        self._power_key(second)

    def turn_off_module(self):
        """Ask the module to power down, then force it with the power key."""
        if self.is_module_on():
            if self.is_module_on():
                self._cmd.send_command_and_wait("AT+CPOF")
                self._sleep(0.2)
            if self._power_key is not None:
                self._pulse(0, 1, 1.5)
                self._sleep(0.2)
        return True

    def turn_on_module(self):
        """Power the module up if needed; return whether it answers."""
        if self.is_module_on():
            return True

        self._pulse(1, 0, 0.5)
        for _ in range(_BOOT_ATTEMPTS):
            if self._cmd.send_command_and_wait("AT"):
                return True
            self._sleep(_BOOT_DELAY)
        return False

    def set_module_in_minimum_functionality_mode(self):
        return self._cmd.send_command_and_wait("AT+CFUN=0", "OK", _FUNCTIONALITY_TIMEOUT)

    def set_module_in_full_functionality_mode(self):
        return self._cmd.send_command_and_wait("AT+CFUN=1", "OK", _FUNCTIONALITY_TIMEOUT)

    def send_module_output_to_console_out(self):
        self._cmd.send_module_output_to_console_out()

    def send_console_input_to_module(self):
        self._cmd.send_console_input_to_module()

    def to_http_post(self):
        return f"&manufacturer={self.manufacturer}&model={self.model}&imei={self.imei}"