"""Tests for the recommendation rules."""

import pytest

from energy_baseline.analysis import analyze
from energy_baseline.models import AnalysisResult, Category, Impact
from energy_baseline.recommendations import recommend


def ids(result: AnalysisResult):
    return [r.id for r in recommend(result)]


def test_empty_analysis_has_no_recommendations():
    assert recommend(analyze([])) == []


@pytest.mark.parametrize('slope,expected', [
    (3.5, ['insulation']),
    (3.0, ['draft-sealing']),
    (2.0, ['draft-sealing']),
    (1.5, []),
    (1.0, []),
])
def test_heating_slope_rules(slope, expected):
    assert ids(AnalysisResult(heating_slope=slope)) == expected


@pytest.mark.parametrize('base_load,expected', [
    (20.0, ['vampire-load']),
    (15.0, ['led-lighting']),
    (8.5, ['led-lighting']),
    (8.0, []),
])
def test_base_load_rules(base_load, expected):
    assert ids(AnalysisResult(base_load_kwh=base_load)) == expected


def test_high_base_load_is_high_impact():
    rec = recommend(AnalysisResult(base_load_kwh=20.0))[0]
    assert rec.id == 'vampire-load'
    assert rec.impact is Impact.HIGH
    assert rec.category is Category.BASELOAD
    assert '20.0 kWh' in rec.description


def test_strong_heating_correlation_scenario(heating_days):
    result = analyze(heating_days)
    found = ids(result)
    assert 'smart-thermostat' in found
    assert 'draft-sealing' not in found
    assert 'insulation' not in found


def test_thermostat_threshold_is_strict():
    assert ids(AnalysisResult(r_squared=0.8)) == []
    assert ids(AnalysisResult(r_squared=0.81)) == ['smart-thermostat']


def test_cooling_rule():
    assert ids(AnalysisResult(cooling_slope=4.0)) == []
    recs = recommend(AnalysisResult(cooling_slope=4.26))
    assert [r.id for r in recs] == ['ac-maintenance']
    assert recs[0].category is Category.COOLING
    assert '4.3 kWh' in recs[0].description


def test_rules_are_independent_and_ordered():
    result = AnalysisResult(base_load_kwh=16.0, heating_slope=3.2, cooling_slope=5.0, r_squared=0.9)
    assert ids(result) == ['insulation', 'smart-thermostat', 'vampire-load', 'ac-maintenance']


def test_description_rounds_to_one_decimal():
    rec = recommend(AnalysisResult(heating_slope=3.456))[0]
    assert '3.5 kWh per degree' in rec.description
