import pytest

from agrocam.console import Console


class FakePort:
    def __init__(self, incoming=b""):
        self.rx = bytearray(incoming)
        self.tx = bytearray()
        self.is_open = False
        self.baudrate = 9600
        self.flushed = False

    @property
    def in_waiting(self):
        return len(self.rx)

    def read(self, size=1):
        chunk = bytes(self.rx[:size])
        del self.rx[:size]
        return chunk

    def write(self, data):
        self.tx += data
        return len(data)

    def open(self):
        self.is_open = True

    def close(self):
        self.is_open = False

    def flush(self):
        self.flushed = True


def test_begin_opens_port_at_console_speed():
    port = FakePort()
    console = Console(port)
    assert console.begin(100) is True
    assert port.is_open
    assert port.baudrate == Console.BAUD_RATE


def test_end_flushes_and_closes():
    port = FakePort()
    console = Console(port)
    console.begin(10)
    console.end()
    assert port.flushed
    assert not port.is_open


def test_end_on_closed_port_does_nothing():
    port = FakePort()
    Console(port).end()
    assert not port.flushed


def test_println_appends_crlf():
    port = FakePort()
    count = Console(port).println("hi")
    assert bytes(port.tx) == b"hi\r\n"
    assert count == len(b"hi\r\n")


def test_println_without_text_writes_line_ending():
    port = FakePort()
    Console(port).println()
    assert bytes(port.tx) == b"\r\n"


def test_print_has_no_line_ending():
    port = FakePort()
    Console(port).print("abc")
    assert bytes(port.tx) == b"abc"


@pytest.mark.parametrize("data, expected", [(65, b"A"), (b"xyz", b"xyz"), ("é", "é".encode("utf-8"))])
def test_write_accepts_int_bytes_and_text(data, expected):
    port = FakePort()
    assert Console(port).write(data) == len(expected)
    assert bytes(port.tx) == expected


def test_read_returns_bytes_then_minus_one():
    console = Console(FakePort(b"ok"))
    assert console.available() == 2
    assert console.read() == ord("o")
    assert console.read() == ord("k")
    assert console.available() == 0
    assert console.read() == -1