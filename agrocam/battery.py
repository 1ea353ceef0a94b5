"""Battery voltage and charge estimate from the divider ADC reading."""

import time

# The battery feeds the ADC through a 1:2 divider.
_DIVIDER_FACTOR = 2.0
_ADC_REFERENCE_VOLTAGE = 3.3
_ADC_LEVELS = 4095  # 12-bit conversion

_START = time.monotonic()


def _uptime_ms():
    return int((time.monotonic() - _START) * 1000)


class Battery:
    """Latest battery sample: ADC value, voltage and charge percentage."""

    def __init__(self, zero_percent_voltage, max_voltage, low_battery_mode_percent, adc_value=0, clock=_uptime_ms):
        self.zero_percent_voltage = zero_percent_voltage
        self.max_voltage = max_voltage
        self.low_battery_mode_percent = low_battery_mode_percent
        self._clock = clock
        self.timestamp_ms = 0
        self.adc_value = 0
        self.voltage = 0.0
        self.percentage = 0.0
        self.refresh(adc_value)

    def refresh(self, adc_value):
        """Record a new ADC sample and recompute voltage and percentage."""
        self.timestamp_ms = int(self._clock())
        self.adc_value = int(adc_value)
        self.voltage = _DIVIDER_FACTOR * self.adc_value * _ADC_REFERENCE_VOLTAGE / _ADC_LEVELS

        span = self.max_voltage - self.zero_percent_voltage
        percent = 100 * (self.voltage - self.zero_percent_voltage) / span
        self.percentage = min(max(percent, 0.0), 100.0)

    @property
    def is_low_battery_mode(self):
        return self.percentage < self.low_battery_mode_percent

    def to_csv(self):
        return f"{self.timestamp_ms},{self.adc_value},{self.voltage:.2f},{self.percentage:.2f}"

    def to_string(self):
        return (
            f"Battery Millis={self.timestamp_ms}, ADC Value={self.adc_value}, "
            f"Voltage={self.voltage:.2f}, Percent={self.percentage:.2f}"
        )

    def to_http_post(self):
        return (
            f"battery_millis={self.timestamp_ms}&battery_adc_value={self.adc_value}"
            f"&battery_voltage={self.voltage:.2f}&battery_percent={self.percentage:.2f}"
        )