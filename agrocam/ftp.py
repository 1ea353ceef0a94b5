"""FTP session set-up through the cellular module."""

from .config import Config


class Ftp:
    """Configures the module's FTP client with the server settings."""

    def __init__(self, command, console, config=Config):
        self._cmd = command
        self._console = console
        self._config = config
        self.last_error = ""

    def _commands(self):
        cfg = self._config
        return [
            "AT+FTPCID=1",
            "AT+FTPMODE=1",  # passive mode
            "AT+FTPTYPE=I",  # binary transfers
            f'AT+FTPSERV="{cfg.ftp_server}"',
            f"AT+FTPPORT={cfg.ftp_port}",
            f'AT+FTPUN="{cfg.ftp_user}"',
            f'AT+FTPPW="{cfg.ftp_pass}"',
        ]

    def begin(self):
        """Send every FTP setting; return whether all were accepted."""
        self._console.println("🔌 Connexion FTP en cours...")

        # Every setting is sent even after a failure.
        results = [self._cmd.send_command_and_wait(command) for command in self._commands()]
        ok = all(results)

        if ok:
            self._console.println(" Connexion FTP configurée.")
        else:
            self.last_error = "Erreur configuration FTP."
            self._console.println(f" {self.last_error}")
        return ok