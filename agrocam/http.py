"""HTTP uploads through the cellular module's HTTP client."""

from pathlib import Path

from .config import Config

BOUNDARY = "BOUNDARY12345"
_CHUNK_SIZE = 4096


class Http:
    """Posts form data and photo files with the module's AT HTTP commands.

    ``sd_root`` is the directory that paths such as ``/photo.jpg`` refer to.
    """

    def __init__(self, command_helper, console, sd_root=".", api_key=Config.api_key):
        self._cmd = command_helper
        self._console = console
        self.sd_root = Path(sd_root)
        self.api_key = api_key

    def _open_session(self, url, content_type):
        """Start an HTTP session; return whether URL and content type were accepted.

        Returns None when the session itself could not be started.
        """
        cmd = self._cmd
        cmd.send_command_and_wait("AT+HTTPTERM")  # end any earlier session
        if not cmd.send_command_and_wait("AT+HTTPINIT"):
            return None
        return cmd.send_command_and_wait(f'AT+HTTPPARA="URL","{url}"') and cmd.send_command_and_wait(
            f'AT+HTTPPARA="CONTENT","{content_type}"'
        )

    def post(self, url, content, content_type):
        """POST ``content``; return whether the body was handed to the module."""
        cmd = self._cmd
        configured = self._open_session(url, content_type)
        if configured is None:
            return False

        is_sent = False
        if configured:
            length = len(content.encode("utf-8"))
            if cmd.send_command_and_wait(f"AT+HTTPDATA={length},5000", "DOWNLOAD", 1000):
                cmd.send_data(content + "\r\n\r\n")
                cmd.send_command_and_wait("AT+HTTPACTION=1", "HTTP_PEER_CLOSED", 10000)
                is_sent = True
        cmd.send_command_and_wait("AT+HTTPTERM")
        return is_sent

    def _multipart(self, filename):
        head = (
            f"--{BOUNDARY}\r\n"
            f'Content-Disposition: form-data; name="photo"; filename="{filename}"\r\n'
            "Content-Type: image/jpeg\r\n\r\n"
        )
        tail = (
            f"\r\n--{BOUNDARY}\r\n"
            'Content-Disposition: form-data; name="key"\r\n\r\n'
            f"{self.api_key}\r\n"
            f"--{BOUNDARY}--\r\n"
        )
        return head, tail

    def post_file_from_sd(self, url, path_on_sd, filename):
        """Upload a stored JPEG as a multipart form; return whether the request was made.

        Raises FileNotFoundError or IsADirectoryError when the file cannot be read.
        """
        path = self.sd_root / str(path_on_sd).lstrip("/")
        if path.is_dir():
            raise IsADirectoryError(f"not a file: {path_on_sd}")

        head, tail = self._multipart(filename)
        with path.open("rb") as photo:
            file_size = path.stat().st_size
            total_size = len(head.encode("utf-8")) + file_size + len(tail.encode("utf-8"))

            console = self._console
            console.println("== DEBUG ==")
            console.println(f"Photo file size (SD): {file_size}")
            console.println(f"Total HTTP payload size: {total_size}")
            console.println(f"HEAD:\n{head}")
            console.println(f"TAIL:\n{tail}")

            cmd = self._cmd
            configured = self._open_session(url, f"multipart/form-data; boundary={BOUNDARY}")
            if configured is None:
                return False

            is_sent = False
            if configured:
                if cmd.send_command_and_wait(f"AT+HTTPDATA={total_size},60000", "DOWNLOAD", 3000):
                    console.println(" en cours d envoi des données HTTP...")
                    cmd.write(head, 1000)
                    while chunk := photo.read(_CHUNK_SIZE):
                        cmd.write(chunk, 2000)
                    cmd.write(tail, 1000)
                else:
                    console.println(" Erreur : echec de lenvoi des données HTTP.")
                cmd.send_command_and_wait("AT+HTTPACTION=1", "HTTP_PEER_CLOSED", 2000)
                cmd.send_command_and_wait("AT+HTTPACTION?")
                console.println(f" Code HTTP brut : {cmd.last_command_response}")
                is_sent = True
            cmd.send_command_and_wait("AT+HTTPTERM")
        return is_sent