"""Line-oriented helpers for the data files kept on the storage card."""

from pathlib import Path

# Upper bound used when every line of a file is to be printed.
_ALL_LINES = 0xFFFF
_LINE_END = b"\r\n"


class FileHelper:
    """Reads, trims and writes files below ``root``, the storage card mount point.

    File names such as ``/bat_data.csv`` are taken relative to ``root``.
    """

    def __init__(self, console, is_debug=False, root="."):
        self._console = console
        self.is_debug = is_debug
        self.root = Path(root)

    def _path(self, file_name):
        return self.root / str(file_name).lstrip("/")

    def line_count(self, file_name):
        """Number of newline characters in the file, 0 when it does not exist."""
        path = self._path(file_name)
        if not path.is_file():
            return 0
        return path.read_bytes().count(b"\n")

    def strip_lines_from_top(self, file_name, num_lines_to_strip):
        """Remove the first ``num_lines_to_strip`` lines and return them.

        Each returned line is stripped of surrounding whitespace and ends with
        a newline. When the file holds fewer complete lines it is deleted.
        Raises FileNotFoundError when the file does not exist.
        """
        path = self._path(file_name)
        if not path.is_file():
            raise FileNotFoundError(f"source file does not exist: {file_name}")

        data = path.read_bytes()
        lines = []
        pos = 0
        while len(lines) < num_lines_to_strip:
            end = data.find(b"\n", pos)
            if end < 0:
                break
            lines.append(data[pos:end].decode("utf-8", errors="replace").strip())
            pos = end + 1

        if len(lines) == num_lines_to_strip:
            path.write_bytes(data[pos:])
        else:
            path.unlink()

        return "".join(f"{line}\n" for line in lines)

    def print_all_lines(self, file_name):
        """Print the whole file to the console; return the number of lines printed."""
        return self.print_lines(file_name, _ALL_LINES)

    def print_lines(self, file_name, num_lines_to_print):
        """Print up to ``num_lines_to_print`` lines between banner lines."""
        path = self._path(file_name)
        if not path.is_file():
            self._console.println(f"File ({file_name}) does not exist")
            return 0

        chunks = path.read_bytes().split(b"\n")
        complete = chunks[:-1]
        pieces = [chunk + b"\n" for chunk in complete[:num_lines_to_print]]
        if len(complete) < num_lines_to_print:
            pieces.append(chunks[-1])

        self._console.println("-------FILE BEGIN-------")
        text = b"".join(pieces).decode("utf-8", errors="replace")
        if text:
            self._console.print(text)
        self._console.println("-------FILE END-------")
        return min(len(complete), num_lines_to_print)

    def exists(self, file_name):
        return self._path(file_name).exists()

    def copy(self, source_name, destination_name, skip=0):
        """Copy the source to the destination, leaving out its first ``skip`` bytes.

        Raises FileNotFoundError when the source does not exist.
        """
        source = self._path(source_name)
        if not source.is_file():
            raise FileNotFoundError(f"source file does not exist: {source_name}")
        data = source.read_bytes()
        destination = self._path(destination_name)
        if destination.exists():
            destination.unlink()
        destination.write_bytes(data[skip:])

    def append(self, file_name, new_line):
        """Append ``new_line`` and a line ending to the file, creating it if needed."""
        with self._path(file_name).open("ab") as handle:
            handle.write(str(new_line).encode("utf-8") + _LINE_END)

    def remove(self, file_name):
        """Delete the file; return whether there was one to delete."""
        path = self._path(file_name)
        if not path.exists():
            return False
        path.unlink()
        return True

    def write(self, file_name, data):
        """Replace the file's content with the bytes ``data``."""
        self._path(file_name).write_bytes(bytes(data))

    def write_content(self, file_name, content):
        """Replace the file's content with ``content`` and a line ending."""
        self._path(file_name).write_bytes(str(content).encode("utf-8") + _LINE_END)

    def read_content(self, file_name):
        """Whole file as text, or an empty string when it does not exist."""
        path = self._path(file_name)
        if not path.is_file():
            return ""
        return path.read_bytes().decode("utf-8", errors="replace")