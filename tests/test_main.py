"""Tests for the CLI, pipeline wiring and Lambda entry point."""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from jakesky import lambda_handler
from jakesky.main import main, parse_args
from jakesky.pipeline import build_assembler, run_forecast
from jakesky.utils.exceptions import ConfigError, TransportError
from jakesky.weather.config import WeatherConfig
from jakesky.weather.models import CurrentConditions, Weather
from jakesky.weather.provider import WeatherProvider
from tests.conftest import FRIDAY, accuweather_response, local_time


def _weather() -> Weather:
    return Weather(
        provider="accuweather",
        timezone="America/New_York",
        current=CurrentConditions(
            timestamp=local_time(FRIDAY, 7), summary="Sunny", temperature=68.0
        ),
    )


# --- Argument parsing ---


def test_parse_args_defaults() -> None:
    """Unset flags stay None so the environment can fill them."""
    args = parse_args([])

    assert args.provider is None
    assert args.latitude is None
    assert args.no_cache is False
    assert args.late_slot is None
    assert args.log_level == "INFO"


def test_parse_args_flags() -> None:
    args = parse_args(
        [
            "--provider", "openweather",
            "--latitude", "47.6",
            "--longitude", "-122.3",
            "--units", "metric",
            "--no-cache",
            "--no-late-slot",
        ]
    )

    assert args.provider == "openweather"
    assert args.latitude == 47.6
    assert args.longitude == -122.3
    assert args.units == "metric"
    assert args.no_cache is True
    assert args.late_slot is False


def test_parse_args_rejects_unknown_provider() -> None:
    with pytest.raises(SystemExit):
        parse_args(["--provider", "darksky"])


# --- CLI ---


@patch("jakesky.main.run_forecast")
def test_main_prints_speech(
    mock_run: MagicMock, capsys: pytest.CaptureFixture[str]
) -> None:
    """The speech document is printed as JSON."""
    mock_run.return_value = _weather()

    main(["--latitude", "40.7", "--longitude", "-74.0", "--late-slot"])

    speech = json.loads(capsys.readouterr().out)
    assert speech["response"]["outputSpeech"]["text"] == "It's currently 68 and Sunny."
    config = mock_run.call_args.args[0]
    assert config.latitude == 40.7
    assert mock_run.call_args.kwargs["include_late_slot"] is True


@patch("jakesky.main.run_forecast")
def test_main_no_cache_flag(mock_run: MagicMock) -> None:
    mock_run.return_value = _weather()

    main(["--no-cache"])

    assert mock_run.call_args.args[0].use_cache is False


@patch("jakesky.main.run_forecast")
def test_main_exits_on_error(mock_run: MagicMock) -> None:
    """Forecast errors exit with status 1."""
    mock_run.side_effect = TransportError("accuweather request failed", "accuweather")

    with pytest.raises(SystemExit) as exc_info:
        main([])

    assert exc_info.value.code == 1


def test_main_exits_on_invalid_config() -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["--timezone", "Mars/Olympus"])

    assert exc_info.value.code == 1


# --- Pipeline ---


def test_run_forecast_requires_location() -> None:
    with pytest.raises(ConfigError, match="required"):
        run_forecast(WeatherConfig(api_key="k"))


def test_run_forecast_requires_api_key() -> None:
    with pytest.raises(ConfigError, match="API key"):
        run_forecast(WeatherConfig(latitude=40.7, longitude=-74.0))


def test_build_assembler_respects_use_cache(tmp_path: Path) -> None:
    cached = build_assembler(WeatherConfig(cache_dir=tmp_path))
    uncached = build_assembler(WeatherConfig(use_cache=False))

    assert cached.cache is not None
    assert cached.cache.cache_dir == tmp_path
    assert uncached.cache is None


def test_run_forecast_end_to_end(weather_config: WeatherConfig) -> None:
    """Configuration flows through to a curated forecast."""
    with patch.object(WeatherProvider, "fetch", return_value=accuweather_response()):
        weather = run_forecast(weather_config, reference_now=local_time(FRIDAY, 15))

    assert weather.provider == "accuweather"
    assert len(weather.forecasts) == 4


# --- Lambda ---


@patch("jakesky.lambda_handler.run_forecast")
def test_lambda_warmup_event(mock_run: MagicMock) -> None:
    """Scheduled warm-up events return an empty response without fetching."""
    result = lambda_handler.handler({"detail-type": "Scheduled Event"}, None)

    assert result == {}
    mock_run.assert_not_called()


@patch("jakesky.lambda_handler.run_forecast")
def test_lambda_alexa_request(mock_run: MagicMock, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JAKESKY_LATITUDE", "40.7")
    monkeypatch.setenv("JAKESKY_LONGITUDE", "-74.0")
    mock_run.return_value = _weather()

    result = lambda_handler.handler({"request": {"type": "LaunchRequest"}}, None)

    assert result["response"]["outputSpeech"]["text"] == "It's currently 68 and Sunny."
    assert mock_run.call_args.args[0].latitude == 40.7
