from agrocam.gps import Gps
from agrocam.gpspoint import convert_nmea_to_degrees

FIX = "+CGPSINFO: 4300.471406,N,08932.266537,W,200323,183805.0,79.2,0.0,0.0"
NO_FIX = "+CGPSINFO: ,,,,,,,,"


class FakeCommand:
    def __init__(self, replies=None):
        self.replies = {key: list(value) for key, value in (replies or {}).items()}
        self.sent = []
        self.last_command_response = ""

    def send_command_and_wait(self, command, desired_response="OK", timeout=1000):
        self.sent.append(command)
        queue = self.replies.get(command)
        if queue:
            ok, text = queue.pop(0) if len(queue) > 1 else queue[0]
        else:
            ok, text = True, ""
        self.last_command_response = text
        return ok


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        self.now += 0.25
        return self.now

    def sleep(self, seconds):
        self.now += seconds


def make_gps(replies):
    clock = FakeClock()
    cmd = FakeCommand(replies)
    return Gps(cmd, sleep=clock.sleep, clock=clock), cmd


def test_fix_is_parsed():
    gps, _ = make_gps({"AT+CGPSINFO": [(True, FIX)]})
    assert gps.current_location(60000, False) is True
    assert gps.location_data == FIX
    point = gps.last_gps_point
    assert point.is_valid
    assert point.latitude == convert_nmea_to_degrees("4300.471406")
    assert point.longitude == -convert_nmea_to_degrees("08932.266537")
    assert (point.datetime.year, point.datetime.month, point.datetime.day) == (2023, 3, 20)


def test_setup_commands_are_sent_first():
    gps, cmd = make_gps({"AT+CGPSINFO": [(True, FIX)]})
    gps.current_location(60000, False)
    assert cmd.sent[:4] == ["AT+CGPS=1,1", "AT+CGPS?", "AT+CGPS=1", "AT+CGPSINFOCFG=10,31"]
    assert "AT+CGPS=0" not in cmd.sent


def test_location_line_taken_from_multiline_response():
    gps, _ = make_gps({"AT+CGPSINFO": [(True, "header\n" + FIX + "\ntrailer")]})
    assert gps.current_location(60000, False) is True
    assert gps.location_data == FIX


def test_retries_until_fix():
    gps, cmd = make_gps({"AT+CGPSINFO": [(True, NO_FIX), (True, FIX)]})
    assert gps.current_location(60000, True) is True
    assert cmd.sent.count("AT+CGPSINFO") == 2
    assert cmd.sent[-1] == "AT+CGPS=0"


def test_no_fix_times_out_and_closes_session():
    gps, cmd = make_gps({"AT+CGPSINFO": [(True, NO_FIX)]})
    assert gps.current_location(10000, True) is False
    assert cmd.sent[-1] == "AT+CGPS=0"
    assert gps.location_data == ""
    assert gps.last_gps_point.is_valid is False


def test_failed_command_times_out():
    gps, cmd = make_gps({"AT+CGPSINFO": [(False, "ERROR")]})
    assert gps.current_location(5000, False) is False
    assert cmd.sent.count("AT+CGPSINFO") >= 1