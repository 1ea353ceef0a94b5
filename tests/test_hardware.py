import pytest

from agrocam.hardware import Hardware


class FakeCommand:
    """Scripted AT command helper: each command yields queued (ok, response) pairs."""

    def __init__(self, answers=None):
        self.answers = {key: list(value) for key, value in (answers or {}).items()}
        self.sent = []
        self.calls = []
        self.last_command_response = ""
        self.begun_with = None
        self.ended = False
        self.verbose_log = []

    def send_command_and_wait(self, command, desired_response="OK", timeout=1000):
        self.sent.append(command)
        self.calls.append((command, desired_response, timeout))
        queue = self.answers.get(command)
        if queue:
            ok, response = queue[0] if len(queue) == 1 else queue.pop(0)
        else:
            ok, response = True, ""
        self.last_command_response = response
        return ok

    def begin(self, timeout):
        self.begun_with = timeout
        return True

    def end(self):
        self.ended = True

    def start_verbose(self):
        self.verbose_log.append(("start", len(self.sent)))

    def end_verbose(self):
        self.verbose_log.append(("end", len(self.sent)))

    def send_module_output_to_console_out(self):
        self.sent.append("<forward-out>")

    def send_console_input_to_module(self):
        self.sent.append("<forward-in>")


class FakeConsole:
    def __init__(self):
        self.begun_with = None
        self.ended = False

    def begin(self, timeout):
        self.begun_with = timeout
        return True

    def end(self):
        self.ended = True


def make(answers=None, power_key=None):
    cmd = FakeCommand(answers)
    sleeps = []
    hw = Hardware(cmd, FakeConsole(), power_key=power_key, sleep=sleeps.append)
    return hw, cmd, sleeps


def test_is_module_on_first_try():
    hw, cmd, sleeps = make()
    assert hw.is_module_on() is True
    assert cmd.sent == ["AT"]
    assert sleeps == []


def test_is_module_on_gives_up_after_five_attempts():
    hw, cmd, sleeps = make({"AT": [(False, "")]})
    assert hw.is_module_on() is False
    assert cmd.sent == ["AT"] * 5
    assert sleeps == [1.0] * 5


def test_init_module_reads_identity():
    hw, cmd, _ = make({
        "AT+CGMI": [(True, "SIMCOM INCORPORATED")],
        "AT+CGMM": [(True, "SIMCOM_SIM7600E")],
        "AT+CGSN": [(True, "IMEI-PLACEHOLDER")],
    })
    assert hw.init_module() is True
    assert hw.manufacturer == "SIMCOM INCORPORATED"
    assert hw.model == "SIMCOM_SIM7600E"
    assert hw.imei == "IMEI-PLACEHOLDER"
    assert 'AT+CGDCONT=1,"IP","ebouygtel.com"' in cmd.sent
    assert cmd.sent[:2] == ["AT", "AT+CMEE=2"]
    assert cmd.sent[-3:] == ["AT+CREG?", "AT+CGATT?", "AT+CSQ"]


def test_init_module_verbose_only_around_diagnostics():
    hw, cmd, _ = make()
    hw.init_module()
    (start_kind, start_at), (end_kind, end_at) = cmd.verbose_log
    assert (start_kind, end_kind) == ("start", "end")
    assert cmd.sent[start_at:end_at] == ["AT+CREG?", "AT+CGATT?", "AT+CSQ"]


def test_init_module_skips_known_identity():
    hw, cmd, _ = make()
    hw.manufacturer, hw.model, hw.imei = "maker", "model", "id"
    assert hw.init_module() is True
    assert not {"AT+CGMI", "AT+CGMM", "AT+CGSN"} & set(cmd.sent)
    assert hw.manufacturer == "maker"


def test_init_module_fails_when_identity_refused():
    hw, cmd, _ = make({"AT+CGMM": [(False, "ERROR")]})
    assert hw.init_module() is False
    assert "AT+CGSN" not in cmd.sent
    assert "AT+CGATT=1" not in cmd.sent


def test_init_module_fails_when_module_off():
    hw, cmd, _ = make({"AT": [(False, "")]})
    assert hw.init_module() is False
    assert set(cmd.sent) == {"AT"}


@pytest.mark.parametrize("response", ["+CGREG: 0,1", "+CGREG: 1,1", "+CGREG: 0,5", "+CGREG: 1,5"])
def test_cellular_connected_states(response):
    hw, _, _ = make({"AT+CGREG?": [(True, response)]})
    assert hw.is_cellular_connected() is True


def test_cellular_not_registered():
    hw, cmd, _ = make({"AT+CGREG?": [(True, "+CGREG: 0,2")]})
    assert hw.is_cellular_connected() is False
    assert cmd.sent == ["AT+CGREG?"]


def test_cellular_state_at_start_of_response_is_ignored():
    hw, _, _ = make({"AT+CGREG?": [(True, "0,1")]})
    assert hw.is_cellular_connected() is False


def test_cellular_configures_then_rechecks():
    hw, cmd, _ = make({"AT+CGREG?": [(True, "+CGREG: 0,2"), (True, "+CGREG: 0,1")]})
    assert hw.is_cellular_connected(True) is True
    assert cmd.sent.count("AT+CGREG?") == 2
    assert "AT+CMEE=2" in cmd.sent


def test_turn_on_when_already_on_sends_no_pulse():
    levels = []
    hw, _, _ = make(power_key=levels.append)
    assert hw.turn_on_module() is True
    assert levels == []


def test_turn_on_pulses_and_waits_for_boot():
    levels = []
    answers = {"AT": [(False, "")] * 7 + [(True, "")]}
    hw, cmd, sleeps = make(answers, power_key=levels.append)
    assert hw.turn_on_module() is True
    assert levels == [1, 0]
    assert cmd.sent == ["AT"] * 8
    assert sleeps == [1.0] * 5 + [0.5, 0.25, 0.25]


def test_turn_on_gives_up():
    hw, cmd, _ = make({"AT": [(False, "")]})
    assert hw.turn_on_module() is False
    assert cmd.sent == ["AT"] * 45


def test_turn_off_powers_down():
    levels = []
    hw, cmd, sleeps = make(power_key=levels.append)
    assert hw.turn_off_module() is True
    assert "AT+CPOF" in cmd.sent
    assert levels == [0, 1]
    assert sleeps == [0.2, 1.5, 0.2]


def test_turn_off_when_already_off():
    levels = []
    hw, cmd, _ = make({"AT": [(False, "")]}, power_key=levels.append)
    assert hw.turn_off_module() is True
    assert "AT+CPOF" not in cmd.sent
    assert levels == []


def test_functionality_modes():
    hw, cmd, _ = make({"AT+CFUN=1": [(False, "")]})
    assert hw.set_module_in_minimum_functionality_mode() is True
    assert hw.set_module_in_full_functionality_mode() is False
    assert cmd.calls == [("AT+CFUN=0", "OK", 5000), ("AT+CFUN=1", "OK", 5000)]


def test_delegation_to_console_and_module():
    hw, cmd, _ = make()
    hw.begin_console(10000)
    hw.end_console()
    hw.begin_serial_module()
    hw.end_serial_module()
    hw.send_module_output_to_console_out()
    hw.send_console_input_to_module()
    assert hw._console.begun_with == 10000
    assert hw._console.ended is True
    assert cmd.begun_with == 1000
    assert cmd.ended is True
    assert cmd.sent == ["<forward-out>", "<forward-in>"]


def test_to_http_post():
    hw, _, _ = make()
    hw.manufacturer, hw.model, hw.imei = "maker", "model", "id"
    assert hw.to_http_post() == "&manufacturer=maker&model=model&imei=id"