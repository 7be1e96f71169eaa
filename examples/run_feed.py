"""Drive the weather service over one simulated day of hourly ticks."""

from datetime import datetime, timezone

from weatherfeed import HourlyClock, RecordingSink, WeatherService, load_config


def main() -> None:
    # Reads WEATHERFEED_* variables, e.g. WEATHERFEED_WEATHER_DATA=weather.xml
    config = load_config(env_file=".env")
    clock = HourlyClock(datetime(2009, 3, 15, tzinfo=timezone.utc))
    sink = RecordingSink()

    with WeatherService(config, clock, sink) as service:
        for _ in range(24):
            result = service.tick()
            if result is not None:
                print(f"Fetched {len(result.reports)} reports via {result.source.value}")
            report = sink.reports[-1]
            print(
                f"  slot {report.time_slot.serial_number}: "
                f"{report.temperature:.1f}°C, wind {report.wind_speed:.1f} m/s "
                f"from {report.wind_direction:.0f}°, cloud {report.cloud_cover:.2f}"
            )
            clock.advance()


if __name__ == "__main__":
    main()
