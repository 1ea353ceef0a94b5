"""Station run: photograph, record the battery, upload, and plan the next wake-up."""

import argparse
import sys
from pathlib import Path

import serial

from .atcommand import AtCommand
from .battery import Battery
from .config import Config
from .console import Console
from .datemodem import NOT_AVAILABLE, DateModem
from .filehelper import FileHelper
from .hardware import Hardware
from .http import Http
from .wakeup import calcul_sleep_ms

BATTERY_DATA_FILE = "/bat_data.csv"
MAX_BATTERY_LINES = 500
WAKE_HOUR = 14
WAKE_MINUTE = 25
_RULE = "-" * 93


class _StdoutPort:
    """Serial-port shaped adapter that writes console output to standard output."""

    def __init__(self):
        self.baudrate = 0
        self.is_open = False
        self.in_waiting = 0

    def open(self):
        self.is_open = True

    def close(self):
        self.is_open = False

    def flush(self):
        sys.stdout.flush()

    def read(self, size=1):
        return b""

    def write(self, data):
        sys.stdout.write(bytes(data).decode("utf-8", errors="replace"))
        return len(data)


def photo_filenames(datetime_text):
    """Storage path and upload name for a photo taken at ``datetime_text``."""
    if datetime_text.startswith(NOT_AVAILABLE):
        return "/photo.jpg", "photo.jpg"
    name = datetime_text.replace(":", "_").replace(" ", "_")
    return f"/photo_{name}.jpg", f"photo_{name}.jpg"


def _parse_args(argv):
    parser = argparse.ArgumentParser(prog="agrocam", description="Run one camera station cycle.")
    parser.add_argument("--modem", required=True, help="serial device of the cellular module")
    parser.add_argument("--sd-root", default=".", help="directory standing for the storage card")
    parser.add_argument("--photo", help="JPEG file holding the photo just taken")
    parser.add_argument("--adc", type=int, default=0, help="battery ADC reading (0-4095)")
    parser.add_argument("--wake-hour", type=int, default=WAKE_HOUR)
    parser.add_argument("--wake-minute", type=int, default=WAKE_MINUTE)
    return parser.parse_args(argv)


def _handle_photo(opts, console, hw, files, http, photo_sd, photo_http):
    if opts.photo is None:
        console.println("Camera Error: no photo available")
        return
    try:
        photo = Path(opts.photo).read_bytes()
    except OSError as exc:
        console.println(f"Camera Error: {exc}")
        return

    console.println("Camera: Photo was taken.")
    if Config.is_camera_save_to_sd:
        try:
            files.write(photo_sd, photo)
            console.println(f"Camera: Photo saved to SD card as {photo_sd}")
        except OSError:
            console.println("Camera: Failed to write photo to SD card.")

    if Config.is_camera_upload_to_api:
        if hw.is_cellular_connected(True):
            try:
                uploaded = http.post_file_from_sd(Config.api_url, photo_sd, photo_http)
            except OSError:
                uploaded = False
            if uploaded:
                console.println("Camera: Photo uploaded to API")
            else:
                console.println("Camera: Failed to upload photo to API.")
        else:
            console.println("Photo Upload: No cellular found.")


def _run(opts, console, command_helper, hw):
    console.println("-" * 42 + "NEW START" + "-" * 42)
    console.println(_RULE)

    is_sd_ready = Path(opts.sd_root).is_dir()
    is_module_on = hw.turn_on_module()
    is_module_configured = is_module_on and hw.init_module()

    def yes_no(flag):
        return "YES" if flag else "NO"

    console.println(f"        SD Storage Initialized: {yes_no(is_sd_ready)}")
    console.println(f"             SIM7600 Module On: {yes_no(is_module_on)}")
    console.println(f"     SIM7600 Module Configured: {yes_no(is_module_configured)}")

    if not (is_sd_ready and is_module_on and is_module_configured):
        console.println("\n\n!!!!!! HALTING EXECUTION - BOARD NOT READY !!!!!!")
        return 1

    console.println(f"                  Manufacturer: {hw.manufacturer}")
    console.println(f"                         Model: {hw.model}")
    console.println(f"                          IMEI: {hw.imei}")
    console.println(_RULE)
    console.println(" Initialisation date via modem avec attente de réseau...")

    date_modem = DateModem(command_helper)
    photo_sd, photo_http = photo_filenames(date_modem.get_datetime_string())
    if photo_sd == "/photo.jpg":
        console.println(" Date inconnue. Nom par défaut utilisé.")
    else:
        console.println(f" Nom de la photo défini : {photo_sd}")

    files = FileHelper(console, False, root=opts.sd_root)
    console.println(_RULE)
    console.println("Battery Data")
    files.print_all_lines(BATTERY_DATA_FILE)
    if files.line_count(BATTERY_DATA_FILE) > MAX_BATTERY_LINES:
        files.remove(BATTERY_DATA_FILE)
    console.println(_RULE)

    battery = Battery(
        Config.battery_zero_point_voltage,
        Config.battery_max_voltage,
        Config.battery_low_mode_percent,
        adc_value=opts.adc,
    )
    new_line = battery.to_csv()
    try:
        files.append(BATTERY_DATA_FILE, new_line)
    except OSError:
        console.println("Failed to append battery data.")
        console.println(new_line)
    console.println(battery.to_string())
    console.println("\n")

    if Config.is_camera_save_to_sd or Config.is_camera_upload_to_api:
        http = Http(command_helper, console, sd_root=opts.sd_root)
        _handle_photo(opts, console, hw, files, http, photo_sd, photo_http)

    hw.send_module_output_to_console_out()

    datetime2 = date_modem.get_datetime_string()
    try:
        if datetime2.startswith(NOT_AVAILABLE):
            raise ValueError(datetime2)
        sleep_ms = calcul_sleep_ms(datetime2, opts.wake_hour, opts.wake_minute)
    except ValueError:
        console.println(" Impossible d'obtenir la date. Pas de sleep.")
        return 0

    console.println(f" Heure actuelle modem : {datetime2}")
    console.println(f" Mise en veille pour {sleep_ms // 1000} secondes")
    console.println(f" Mise en veille pour {sleep_ms // 60000} minutes")
    console.println(f" Mise en veille pour {sleep_ms // 3600000} heurre")
    return 0


def main(argv=None):
    """Run one station cycle; return the process exit status."""
    opts = _parse_args(argv)

    modem = serial.Serial()
    modem.port = opts.modem
    console = Console(_StdoutPort())
    command_helper = AtCommand(modem, console, False)
    hw = Hardware(command_helper, console)

    hw.begin_console(10000)
    try:
        hw.begin_serial_module()
    except serial.SerialException as exc:
        print(f"cannot open modem port {opts.modem}: {exc}", file=sys.stderr)
        return 1

    try:
        return _run(opts, console, command_helper, hw)
    finally:
        hw.end_serial_module()
        hw.end_console()


if __name__ == "__main__":
    sys.exit(main())