"""End-to-end tests of the command line entry point."""

from datetime import date, datetime
from unittest.mock import patch

import pytest

from energy_baseline.cli import build_parser, main
from energy_baseline.models import HourlyWeather
from energy_baseline.weather import GeoLocation

ELECTRIC = """Date,Usage (kWh)
2024-01-01,50
2024-01-02,40
2024-01-03,30
2024-01-04,20
2024-05-01,11
2024-05-02,9
"""

GAS = """Date,Usage (Therms)
2024-01-01,1.0
"""

WEATHER = """date,mean_temp_f,min_temp_f,max_temp_f
2024-01-01,25,20,30
2024-01-02,35,30,40
2024-01-03,45,40,50
2024-01-04,55,50,60
2024-05-01,65,60,70
2024-05-02,66,60,72
"""


@pytest.fixture
def files(tmp_path):
    paths = {}
    for name, content in (('electric', ELECTRIC), ('gas', GAS), ('weather', WEATHER)):
        path = tmp_path / f"{name}.csv"
        path.write_text(content)
        paths[name] = str(path)
    return paths


def test_requires_weather_source():
    with pytest.raises(SystemExit):
        build_parser().parse_args(['--electric', 'e.csv'])


def test_run_with_weather_file(files, capsys):
    code = main(['--electric', files['electric'], '--weather', files['weather']])
    out = capsys.readouterr().out

    assert code == 0
    assert 'Daily Base Load: 10.0 kWh' in out
    assert 'Heating Sensitivity: 1.00 kWh per HDD' in out
    assert 'Smart Thermostat' in out


def test_run_with_gas_and_plot(files, tmp_path, capsys):
    plot = tmp_path / 'fit.png'
    code = main(['--electric', files['electric'], '--gas', files['gas'],
                 '--weather', files['weather'], '--plot', str(plot)])
    assert code == 0
    assert plot.exists()


def test_run_with_zip_fetches_weather(files, capsys):
    with patch('energy_baseline.cli.weather_for_readings', return_value=[]) as fetch:
        code = main(['--electric', files['electric'], '--zip', '01862'])
    assert code == 0
    assert fetch.call_args[0][0] == '01862'
    assert len(fetch.call_args[0][1]) == 6


def test_gas_file_in_electric_slot_fails(files):
    assert main(['--electric', files['gas'], '--weather', files['weather']]) == 1


def test_missing_file_fails(tmp_path, files):
    assert main(['--electric', str(tmp_path / 'nope.csv'), '--weather', files['weather']]) == 1


def test_no_usage_files(files):
    assert main(['--weather', files['weather']]) == 2


def test_missing_weather_file_fails(tmp_path, files):
    assert main(['--electric', files['electric'], '--weather', str(tmp_path / 'nope.csv')]) == 1


def test_non_iso_weather_dates_fail(tmp_path, files):
    weather = tmp_path / 'us_dates.csv'
    weather.write_text("date,mean_temp_f,min_temp_f,max_temp_f\n01/02/2024,30,20,40\n")
    assert main(['--electric', files['electric'], '--weather', str(weather)]) == 1


def test_daily_plot_in_gas_view(files, tmp_path):
    plot = tmp_path / 'daily.png'
    code = main(['--electric', files['electric'], '--gas', files['gas'], '--weather', files['weather'],
                 '--daily-plot', str(plot), '--view-mode', 'gas'])
    assert code == 0
    assert plot.exists()


def test_unknown_view_mode_rejected(files):
    with pytest.raises(SystemExit):
        main(['--electric', files['electric'], '--weather', files['weather'], '--view-mode', 'water'])


def test_hour_profile_from_weather_file_has_no_temperatures(files, capsys):
    code = main(['--electric', files['electric'], '--weather', files['weather'],
                 '--hour-profile', '2024-01-02'])
    out = capsys.readouterr().out

    assert code == 0
    assert 'Hourly profile for 2024-01-02 (UTC)' in out
    assert '40.0' in out
    assert 'NaN' in out


def test_hour_profile_with_zip_fetches_hourly_weather(files, capsys):
    location = GeoLocation(name='Lowell', latitude=42.6, longitude=-71.3, country='US', admin1='MA')
    hourly = [HourlyWeather(time=datetime(2024, 1, 2, 0), temp_f=12.5)]
    with patch('energy_baseline.cli.weather_for_readings', return_value=[]), \
            patch('energy_baseline.cli.get_coordinates', return_value=location) as geocode, \
            patch('energy_baseline.cli.get_hourly_weather', return_value=hourly) as fetch:
        code = main(['--electric', files['electric'], '--zip', '01862', '--hour-profile', '2024-01-02'])
    out = capsys.readouterr().out

    assert code == 0
    assert geocode.call_args[0][0] == '01862'
    assert fetch.call_args[0][:4] == (42.6, -71.3, date(2024, 1, 2), date(2024, 1, 2))
    assert '12.5' in out


def test_hour_profile_requires_iso_date(files):
    with pytest.raises(SystemExit):
        build_parser().parse_args(['--weather', files['weather'], '--hour-profile', '01/02/2024'])
