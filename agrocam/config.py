"""Static settings for the camera station: upload targets, battery and GPS tuning."""


class Config:
    """Read-only configuration values shared by the station components."""

    ftp_server = "ftp.example.com"
    ftp_port = 21
    ftp_user = "user@example.com"
    ftp_pass = "password"
    ftp_target_path = "/data/DEVICE01"

    # Smallest voltage (V) at which the board still works.
    battery_zero_point_voltage = 3.3
    # Battery voltage (V) when fully charged.
    battery_max_voltage = 4.2
    # Below this percentage the battery is in low battery mode.
    battery_low_mode_percent = 5.0

    # Endpoint that photos and data are posted to, and the key sent with them.
    api_url = "https://example.com/api/upload"
    api_key = "placeholder"
    # Number of points cached before sending to the API.
    api_num_gps_points_in_payload = 1
    # Maximum number of points in each API payload.
    api_max_points_per_post = 60

    # Lower bound (s) for the recommended GPS refresh period.
    gps_refresh_period_smallest_sec = 1
    # Default and upper bound (s) for the recommended GPS refresh period.
    gps_refresh_period_default_sec = 15
    # Refresh period (s) used in low battery mode.
    gps_refresh_period_low_battery_sec = 3600
    # Ideal distance between points, used to derive a refresh period from speed.
    gps_ideal_distance_between_points_feet = 150.0
    # Minimum distance (ft) from the last cached point before a new one is cached.
    gps_distance_threshold_feet = 0.01
    # Maximum time (s) between cached points regardless of distance.
    gps_max_time_threshold_seconds = 120

    # Save the most recent photo to the SD card.
    is_camera_save_to_sd = True
    # Upload the most recent photo to the API.
    is_camera_upload_to_api = True