from __future__ import annotations

import textwrap

import pytest

from src.config import AppConfig, load_config


VALID_YAML = """
transit:
  bus_url: "https://api-v3.mbta.com/predictions?filter[stop]=5483"
  bus_title: "109 Bus"
  rail_url: "https://api-v3.mbta.com/predictions?filter[stop]=place-sull"
  rail_title: "Orange Line"
  poll_interval_seconds: 30

weather:
  latitude: 42.36
  longitude: -71.06
  poll_interval_seconds: 600

schedule:
  start_hour: 6
  end_hour: 22
  timezone: "America/New_York"

display:
  width: 320
  height: 240

logging:
  level: "INFO"
  log_dir: "logs/"
"""


def _write_yaml(tmp_path, contents: str) -> str:
    path = tmp_path / "config.yaml"
    path.write_text(textwrap.dedent(contents))
    return str(path)


def test_load_config_valid(tmp_path, monkeypatch) -> None:
    path = _write_yaml(tmp_path, VALID_YAML)

    monkeypatch.setenv("MBTA_API_KEY", "testkey")
    config = load_config(path)

    assert isinstance(config, AppConfig)
    assert config.transit.api_key == "testkey"
    assert config.transit.bus_title == "109 Bus"
    assert config.transit.poll_interval_seconds == 30
    assert config.transit.http_timeout_seconds == 8
    assert config.weather.latitude == 42.36
    assert config.schedule.start_hour == 6
    assert config.schedule.timezone == "America/New_York"
    assert config.connectivity.host == "api-v3.mbta.com"
    assert config.display.output_path == "emulator_output/frame.png"
    assert config.log.level == "INFO"


def test_load_config_missing_file(tmp_path) -> None:
    missing_path = tmp_path / "does_not_exist.yaml"

    with pytest.raises(ValueError):
        load_config(str(missing_path))


def test_load_config_missing_transit_section(tmp_path) -> None:
    yaml_text = VALID_YAML.replace("transit:", "other:")
    path = _write_yaml(tmp_path, yaml_text)

    with pytest.raises(ValueError):
        load_config(path)


def test_load_config_missing_rail_url(tmp_path) -> None:
    yaml_text = "\n".join(line for line in VALID_YAML.splitlines() if "rail_url" not in line)
    path = _write_yaml(tmp_path, yaml_text)

    with pytest.raises(ValueError):
        load_config(path)


def test_load_config_rejects_bad_hour(tmp_path) -> None:
    path = _write_yaml(tmp_path, VALID_YAML.replace("end_hour: 22", "end_hour: 25"))

    with pytest.raises(ValueError):
        load_config(path)


def test_load_config_rejects_unknown_timezone(tmp_path) -> None:
    path = _write_yaml(tmp_path, VALID_YAML.replace("America/New_York", "Mars/Olympus_Mons"))

    with pytest.raises(ValueError):
        load_config(path)


def test_load_config_rejects_non_positive_interval(tmp_path) -> None:
    path = _write_yaml(tmp_path, VALID_YAML.replace("poll_interval_seconds: 30", "poll_interval_seconds: 0"))

    with pytest.raises(ValueError):
        load_config(path)
