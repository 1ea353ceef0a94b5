"""Debug console over a serial-like port."""

import time

_POLL_INTERVAL = 0.001


class Console:
    """Line-oriented text console on top of a serial port.

    ``port`` is any object with the pyserial interface used here: ``is_open``,
    ``baudrate``, ``in_waiting``, ``open()``, ``close()``, ``flush()``,
    ``read(size)`` and ``write(data)``.
    """

    BAUD_RATE = 115200

    def __init__(self, port, encoding="utf-8"):
        self._port = port
        self._encoding = encoding

    def begin(self, timeout):
        """Open the port and wait up to ``timeout`` ms for it; return whether it is open."""
        self._port.baudrate = self.BAUD_RATE
        if not self._port.is_open:
            self._port.open()
        deadline = time.monotonic() + timeout / 1000
        while not self._port.is_open and time.monotonic() < deadline:
            time.sleep(_POLL_INTERVAL)
        return bool(self._port.is_open)

    def end(self):
        """Flush and close the port if it is open."""
        if self._port.is_open:
            self._port.flush()
            self._port.close()

    def available(self):
        """Number of bytes waiting to be read."""
        return self._port.in_waiting

    def read(self):
        """Next byte as an int, or -1 when nothing is waiting."""
        if self._port.in_waiting <= 0:
            return -1
        data = self._port.read(1)
        return data[0] if data else -1

    def write(self, data):
        """Write a byte value, bytes or text; return the number of bytes written."""
        if isinstance(data, int):
            payload = bytes([data & 0xFF])
        elif isinstance(data, str):
            payload = data.encode(self._encoding)
        else:
            payload = bytes(data)
        return self._port.write(payload) or 0

    def print(self, text):
        """Write ``text`` without a line ending."""
        return self.write(str(text))

    def println(self, text=""):
        """Write ``text`` followed by CR LF."""
        return self.write(f"{text}\r\n")