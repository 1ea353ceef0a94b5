from agrocam.config import Config
from agrocam.ftp import Ftp


class FakeCommand:
    def __init__(self, failing=()):
        self.failing = set(failing)
        self.sent = []
        self.last_command_response = ""

    def send_command_and_wait(self, command, desired_response="OK", timeout=1000):
        self.sent.append(command)
        return command not in self.failing


class FakeConsole:
    def __init__(self):
        self.lines = []

    def print(self, text):
        self.lines.append(str(text))

    def println(self, text=""):
        self.lines.append(str(text))


def expected_commands():
    return [
        "AT+FTPCID=1",
        "AT+FTPMODE=1",
        "AT+FTPTYPE=I",
        f'AT+FTPSERV="{Config.ftp_server}"',
        f"AT+FTPPORT={Config.ftp_port}",
        f'AT+FTPUN="{Config.ftp_user}"',
        f'AT+FTPPW="{Config.ftp_pass}"',
    ]


def test_begin_sends_all_settings():
    cmd, console = FakeCommand(), FakeConsole()
    ftp = Ftp(cmd, console)
    assert ftp.begin() is True
    assert cmd.sent == expected_commands()
    assert ftp.last_error == ""
    assert console.lines[-1] == " Connexion FTP configurée."


def test_begin_reports_failure_but_sends_everything():
    cmd, console = FakeCommand(failing={"AT+FTPMODE=1"}), FakeConsole()
    ftp = Ftp(cmd, console)
    assert ftp.begin() is False
    assert cmd.sent == expected_commands()
    assert ftp.last_error == "Erreur configuration FTP."
    assert console.lines[-1] == " Erreur configuration FTP."


def test_begin_uses_given_config():
    class OtherConfig(Config):
        ftp_server = "files.example.com"
        ftp_port = 2121

    cmd = FakeCommand()
    Ftp(cmd, FakeConsole(), config=OtherConfig).begin()
    assert 'AT+FTPSERV="files.example.com"' in cmd.sent
    assert "AT+FTPPORT=2121" in cmd.sent