"""
Regime Analyzer: base load and heating/cooling sensitivity.

Days are split by mean outdoor temperature into heating, cooling and
shoulder regimes. Heating and cooling days each get a straight-line fit of
total energy against degree days; shoulder days estimate the weather
independent base load.

Every degenerate input has a defined fallback (zero slope, zero R², minimum
observed day as base load) so the analysis always produces a result. A zero
slope from a small sample is "not detected", not "proven absent"; the day
counts on ``AnalysisResult`` tell the two apart.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np
import statsmodels.api as sm
from scipy import stats

from .config import DEFAULT_CONFIG, EnergyConfig
from .models import AnalysisResult, DailyAggregate, Regime, RegimeFits, RegressionFit

logger = logging.getLogger(__name__)


# =============================================================================
# DEGREE DAYS AND REGIMES
# =============================================================================

def heating_degree_days(mean_temp_f: float, config: EnergyConfig = DEFAULT_CONFIG) -> float:
    return max(0.0, config.hdd_base - mean_temp_f)


def cooling_degree_days(mean_temp_f: float, config: EnergyConfig = DEFAULT_CONFIG) -> float:
    return max(0.0, mean_temp_f - config.cdd_base)


def total_kwh(aggregate: DailyAggregate, config: EnergyConfig = DEFAULT_CONFIG) -> float:
    """Electric plus gas, with gas converted from Therms to kWh."""
    return aggregate.electric_kwh + aggregate.gas_therms * config.therms_to_kwh


def classify(mean_temp_f: Optional[float], config: EnergyConfig = DEFAULT_CONFIG) -> Optional[Regime]:
    """Regime of a day, or None when its temperature is unknown."""
    if mean_temp_f is None:
        return None
    if mean_temp_f < config.heating_threshold:
        return Regime.HEATING
    if mean_temp_f > config.cooling_threshold:
        return Regime.COOLING
    return Regime.SHOULDER


@dataclass
class _Partition:
    heating_x: List[float] = field(default_factory=list)
    heating_y: List[float] = field(default_factory=list)
    cooling_x: List[float] = field(default_factory=list)
    cooling_y: List[float] = field(default_factory=list)
    shoulder: List[float] = field(default_factory=list)
    temps: List[float] = field(default_factory=list)
    totals: List[float] = field(default_factory=list)


def _partition(aggregates: Sequence[DailyAggregate], config: EnergyConfig) -> _Partition:
    part = _Partition()
    for day in aggregates:
        regime = classify(day.mean_temp_f, config)
        if regime is None:
            continue

        total = total_kwh(day, config)
        part.temps.append(day.mean_temp_f)
        part.totals.append(total)

        if regime is Regime.HEATING:
            part.heating_x.append(heating_degree_days(day.mean_temp_f, config))
            part.heating_y.append(total)
        elif regime is Regime.COOLING:
            part.cooling_x.append(cooling_degree_days(day.mean_temp_f, config))
            part.cooling_y.append(total)
        else:
            part.shoulder.append(total)
    return part


# =============================================================================
# REGRESSION
# =============================================================================

def fit_line(x: Sequence[float], y: Sequence[float], config: EnergyConfig = DEFAULT_CONFIG) -> RegressionFit:
    """
    Ordinary least squares fit of y on x with an intercept.

    Too few points or no spread in x gives an all-zero fit. R² is zero when
    y has no spread.
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    n = len(x)

    if n < config.min_regression_points or np.ptp(x) == 0:
        return RegressionFit(n_points=n)

    model = sm.OLS(y, sm.add_constant(x, has_constant='add')).fit()
    intercept, slope = (float(p) for p in model.params)
    if not (np.isfinite(slope) and np.isfinite(intercept)):
        return RegressionFit(n_points=n)

    r_squared = float(model.rsquared) if np.ptp(y) > 0 else 0.0
    if not np.isfinite(r_squared):
        r_squared = 0.0

    return RegressionFit(slope=slope, intercept=intercept, r_squared=r_squared, n_points=n)


def _temperature_correlation(temps: List[float], totals: List[float]) -> float:
    if len(temps) < 2 or np.ptp(temps) == 0 or np.ptp(totals) == 0:
        return 0.0
    r, _ = stats.pearsonr(temps, totals)
    return float(r) if np.isfinite(r) else 0.0


def fit_regimes(aggregates: Sequence[DailyAggregate], config: EnergyConfig = DEFAULT_CONFIG) -> RegimeFits:
    """Full heating and cooling fits, unclamped, for charts and reports."""
    part = _partition(aggregates, config)
    return RegimeFits(
        heating=fit_line(part.heating_x, part.heating_y, config),
        cooling=fit_line(part.cooling_x, part.cooling_y, config),
        temperature_correlation=_temperature_correlation(part.temps, part.totals),
    )


# =============================================================================
# ANALYSIS
# =============================================================================

def analyze(aggregates: Sequence[DailyAggregate], config: EnergyConfig = DEFAULT_CONFIG) -> AnalysisResult:
    """
    Estimate base load and heating/cooling sensitivity from unified days.

    Days without temperature are ignored. Negative slopes are clamped to zero
    and only the heating fit's R² is reported.
    """
    part = _partition(aggregates, config)

    heating = fit_line(part.heating_x, part.heating_y, config)
    cooling = fit_line(part.cooling_x, part.cooling_y, config)

    if part.shoulder:
        base_load = float(np.mean(part.shoulder))
    elif part.totals:
        # No mild days: the lowest observed day is a conservative floor
        base_load = float(min(part.totals))
        logger.debug("No shoulder-season days, using minimum day as base load")
    else:
        base_load = 0.0

    logger.debug(
        f"Regime days: heating={heating.n_points}, cooling={cooling.n_points}, "
        f"shoulder={len(part.shoulder)}"
    )

    return AnalysisResult(
        base_load_kwh=max(0.0, base_load),
        heating_slope=max(0.0, heating.slope),
        cooling_slope=max(0.0, cooling.slope),
        r_squared=heating.r_squared or 0.0,
        heating_days=len(part.heating_x),
        cooling_days=len(part.cooling_x),
        shoulder_days=len(part.shoulder),
    )
