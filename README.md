# agrocam

`agrocam` runs a field camera station built around a cellular module
that is driven over a serial line with AT commands. It can:

- Send AT commands and wait for the expected reply (`agrocam.atcommand.AtCommand`).
- Power up the module, read its identity and set up the data network (`agrocam.hardware.Hardware`).
- Read the network clock from the module (`agrocam.datemodem.DateModem`).
- Work out how long to sleep until the next capture time (`agrocam.wakeup.calcul_sleep_ms`).
- Turn a battery ADC reading into a voltage and percentage and log it as CSV (`agrocam.battery.Battery`).
- Keep line-oriented data files in a directory that stands for the storage card (`agrocam.filehelper.FileHelper`).
- Parse, store and compare GPS fixes (`agrocam.gpspoint.GpsPoint`, `agrocam.gpspoint.GpsCalculator`)
  and poll the module's receiver for one (`agrocam.gps.Gps`).
- Post form data, and upload a stored JPEG as a multipart form, through the module's HTTP client (`agrocam.http.Http`).
- Configure the module's FTP client with the server settings (`agrocam.ftp.Ftp`).

## Installation

```
pip install .
```

The serial link uses `pyserial`.

## Command line

The package installs one command, which runs one station cycle:

```
agrocam --modem /dev/ttyUSB0 --sd-root ./card --photo shot.jpg --adc 2600
```

Options:

- `--modem` (required): serial device of the cellular module.
- `--sd-root`: directory standing for the storage card (default `.`).
- `--photo`: JPEG file holding the photo just taken.
- `--adc`: battery ADC reading, 0 to 4095 (default 0).
- `--wake-hour`, `--wake-minute`: daily capture time (default 14:25).

The cycle powers up the module, reads its identity and configures the
network, then reads the date from the module and names the photo after
it. It prints the battery log (`/bat_data.csv` under the card
directory), deletes it once it holds more than 500 lines, and appends the
new battery reading. The photo is saved under the card directory and
uploaded to `Config.api_url`. Last, it prints how long to sleep until the
next capture time. Console output goes to standard output.

The exit status is 1 when the modem port cannot be opened or when the
card directory or the module is not ready, and 0 otherwise.

## What the package does not do

- It does not operate a camera: the photo must already be in the file given with `--photo`.
- It does not read the battery ADC: the reading is given with `--adc`.
- It does not put the machine to sleep: it only prints the sleep time it computed.
- It does not drive a protective cover or any other actuator.
- `Ftp` only sends the server settings to the module; it does not transfer files.
- The command does not use GPS; `Gps` and `GpsPoint` are available as a library.

## Library use

### Dates and times

```python
from agrocam.timestamp import DateTime

dt = DateTime()
dt.set(2023, 3, 20, 18, 38, 5)
print(dt.to_date_time_string())   # March 20, 2023 6:38:5 PM
print(dt.to_timestamp_string())   # 2023-3-20 18:38:5
```

`set` returns whether the date is valid; the string methods return
`"Invalid Date"` otherwise.

### GPS points

A fix reported by the module with `AT+CGPSINFO` can be parsed directly:

```python
from agrocam.gpspoint import GpsPoint, GpsCalculator

fix = GpsPoint.from_nmea_str(
    "+CGPSINFO: 4300.471406,N,08932.266537,W,200323,183805.0,79.2,0.0,0.0"
)
line = fix.serialize()            # y,m,d,h,m,s,lat,lng,alt

restored = GpsPoint()
restored.deserialize(line)
print(restored.to_string())
```

`deserialize` raises `ValueError` when the text has fewer than nine
fields. `GpsCalculator(pt1, pt2)` gives the distance, the elapsed time,
the speed and a suggested GPS refresh period between two points.

### Sleep scheduling

```python
from agrocam.wakeup import calcul_sleep_ms

ms = calcul_sleep_ms("2025-05-20 11:36:50", 14, 25)
```

The first argument is a module date in `yyyy-mm-dd hh:mm:ss` form. The
result is the number of milliseconds until the next occurrence of the
target hour and minute, allowing 27 seconds for going to sleep. A text
shorter than 19 characters raises `ValueError`.

### Photo names

```python
from agrocam.app import photo_filenames

sd_path, upload_name = photo_filenames("2025-05-20 11:36:50")
# ("/photo_2025-05-20_11_36_50.jpg", "photo_2025-05-20_11_36_50.jpg")
```

When the date is not available (`"Non disponible"`), both fall back to
`photo.jpg`.

## Configuration

`agrocam.config.Config` holds the fixed settings:

- the upload endpoint and key, and the FTP server settings;
- the battery voltage thresholds;
- the GPS sampling limits;
- whether photos are saved locally and uploaded.

## Running the tests

```
pip install .[test]
pytest
```