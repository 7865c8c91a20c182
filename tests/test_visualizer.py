"""Smoke tests for the charts (Agg backend, nothing displayed)."""

import matplotlib.pyplot as plt
import pytest

from energy_baseline.analysis import fit_regimes
from energy_baseline.unify import to_frame
from energy_baseline.visualizer import Visualizer

from conftest import make_days


@pytest.fixture
def year_of_days():
    temps = [25, 35, 45, 55, 62, 65, 68, 75, 80, 85]
    totals = [50, 40, 30, 20, 12, 11, 12, 25, 35, 45]
    return make_days(temps, totals)


def test_daily_usage_plot(year_of_days, tmp_path):
    out = tmp_path / 'daily.png'
    viz = Visualizer(to_frame(year_of_days), fit_regimes(year_of_days))
    fig, ax = viz.plot_daily_usage('combined_kwh', save_path=str(out), show=False)
    assert out.exists()
    assert ax.get_title() == 'Daily Energy Usage'
    plt.close(fig)


def test_unknown_view_mode(year_of_days):
    with pytest.raises(ValueError):
        Visualizer(to_frame(year_of_days)).plot_daily_usage('water', show=False)


def test_degree_day_plot(year_of_days, tmp_path):
    out = tmp_path / 'fit.png'
    viz = Visualizer(to_frame(year_of_days), fit_regimes(year_of_days))
    fig, (ax_h, ax_c) = viz.plot_degree_day_fit(save_path=str(out), show=False)
    assert out.exists()
    assert 'slope = 1.00' in ax_h.get_title()
    assert 'slope = 2.00' in ax_c.get_title()
    plt.close(fig)
