"""AT command exchange with the cellular module over a serial port."""

import time

_POLL_INTERVAL = 0.001
_ENCODING = "utf-8"


class AtCommand:
    """Sends AT commands to the module and collects what it answers.

    ``serial`` follows the pyserial interface; ``console`` is a
    :class:`agrocam.console.Console` used for verbose output and forwarding.
    """

    BAUD_RATE = 115200

    def __init__(self, serial, console, is_debug=False, forward_timeout=1000):
        self._serial = serial
        self._console = console
        self.is_debug = is_debug
        self.forward_timeout = forward_timeout
        self.last_command_response = ""
        self._from_console = ""

    def begin(self, timeout):
        """Open the module port and wait up to ``timeout`` ms; return whether it is open."""
        self._serial.baudrate = self.BAUD_RATE
        if not self._serial.is_open:
            self._serial.open()
        deadline = time.monotonic() + timeout / 1000
        while not self._serial.is_open and time.monotonic() < deadline:
            time.sleep(_POLL_INTERVAL)
        return bool(self._serial.is_open)

    def end(self):
        if self._serial.is_open:
            self._serial.flush()
            self._serial.close()

    def start_verbose(self):
        self.is_debug = True

    def end_verbose(self):
        self.is_debug = False

    def _drain(self):
        waiting = self._serial.in_waiting
        return self._serial.read(waiting) if waiting > 0 else b""

    def _collect(self, timeout, until=None):
        """Read for ``timeout`` ms, or until ``until`` appears; return (text, found)."""
        received = bytearray()
        found = False
        deadline = time.monotonic() + timeout / 1000
        while time.monotonic() < deadline and not found:
            chunk = self._drain()
            if chunk:
                received += chunk
            else:
                time.sleep(_POLL_INTERVAL)
            if until is not None:
                found = until in received.decode(_ENCODING, errors="replace")
        received += self._drain()
        return received.decode(_ENCODING, errors="replace"), found

    def _send_line(self, text):
        return self._serial.write(f"{text}\r\n".encode(_ENCODING))

    def send_command_and_wait(self, command, desired_response="OK", timeout=1000):
        """Send ``command`` and wait up to ``timeout`` ms for ``desired_response``.

        The answer, without the echoed command and the desired response, is
        kept in ``last_command_response``. Returns whether the response came.
        """
        self.last_command_response = ""
        self._send_line(command)

        response, found = self._collect(timeout, desired_response)
        if command:
            response = response.replace(command, "")
        if found and desired_response:
            response = response.replace(desired_response, "")
        self.last_command_response = response.strip()

        if self.is_debug:
            self._console.println(f"----> {command} <----")
            self._console.println(self.last_command_response)

        return found

    def send_data(self, data, timeout=1000):
        """Send ``data`` as a line and return everything read during ``timeout`` ms."""
        self._send_line(data)
        response, _ = self._collect(timeout)
        if self.is_debug:
            self._console.print(response)
        return response

    def write(self, data, timeout):
        """Write raw text or bytes, read answers for ``timeout`` ms; return bytes written."""
        payload = data.encode(_ENCODING) if isinstance(data, str) else bytes(data)
        num_bytes = self._serial.write(payload) or 0
        response, _ = self._collect(timeout)
        if self.is_debug:
            self._console.print(response)
        return num_bytes

    def send_module_output_to_console_out(self):
        """Copy every waiting byte from the module to the console."""
        while self._serial.in_waiting > 0:
            data = self._serial.read(1)
            if not data:
                break
            self._console.write(data)

    def send_console_input_to_module(self):
        """Forward each complete line typed on the console to the module."""
        while self._console.available() > 0:
            c = self._console.read()
            if c < 0:
                break
            if c not in (ord("\n"), ord("\r")):
                self._from_console += chr(c)
            elif self._from_console:
                self._console.println(self._from_console)
                self.send_data(self._from_console, self.forward_timeout)
                self._from_console = ""