"""Rule-based efficiency recommendations from a fitted analysis."""

from typing import List

from .models import AnalysisResult, Category, Impact, Recommendation

# Rule thresholds
INSULATION_SLOPE = 3.0  # kWh/HDD
DRAFT_SEALING_SLOPE = 1.5  # kWh/HDD
THERMOSTAT_R_SQUARED = 0.8
VAMPIRE_BASE_LOAD = 15.0  # kWh/day
LED_BASE_LOAD = 8.0  # kWh/day
AC_MAINTENANCE_SLOPE = 4.0  # kWh/CDD


def recommend(analysis: AnalysisResult) -> List[Recommendation]:
    """Recommendations triggered by the analysis, in rule order."""
    recommendations = []
    heating_slope = analysis.heating_slope
    base_load = analysis.base_load_kwh

    # Heating
    if heating_slope > INSULATION_SLOPE:
        recommendations.append(Recommendation(
            id='insulation',
            title='Improve Insulation',
            description=(
                f"Your home uses {heating_slope:.1f} kWh per degree of cold. This is relatively "
                f"high sensitivity, suggesting poor insulation or drafty windows."
            ),
            impact=Impact.HIGH,
            category=Category.HEATING,
        ))
    elif heating_slope > DRAFT_SEALING_SLOPE:
        recommendations.append(Recommendation(
            id='draft-sealing',
            title='Seal Drafts',
            description=(
                f"At {heating_slope:.1f} kWh per degree of cold, check windows and doors for "
                f"drafts. Small gaps can significantly increase heating costs."
            ),
            impact=Impact.MEDIUM,
            category=Category.HEATING,
        ))

    if analysis.r_squared > THERMOSTAT_R_SQUARED:
        recommendations.append(Recommendation(
            id='smart-thermostat',
            title='Smart Thermostat Optimization',
            description=(
                f"Temperature explains {analysis.r_squared:.1f} of the variation in your winter "
                f"usage (R²). A smart thermostat with setbacks could be very effective."
            ),
            impact=Impact.MEDIUM,
            category=Category.HEATING,
        ))

    # Base load
    if base_load > VAMPIRE_BASE_LOAD:
        recommendations.append(Recommendation(
            id='vampire-load',
            title='Check "Vampire" Loads',
            description=(
                f"Your constant daily usage is high (~{base_load:.1f} kWh). Check for old "
                f"refrigerators, dehumidifiers, or always-on electronics."
            ),
            impact=Impact.HIGH,
            category=Category.BASELOAD,
        ))
    elif base_load > LED_BASE_LOAD:
        recommendations.append(Recommendation(
            id='led-lighting',
            title='Switch to LED',
            description=(
                f"With a base load of {base_load:.1f} kWh per day, ensuring all lights are LED "
                f"can bring it down."
            ),
            impact=Impact.LOW,
            category=Category.BASELOAD,
        ))

    # Cooling
    if analysis.cooling_slope > AC_MAINTENANCE_SLOPE:
        recommendations.append(Recommendation(
            id='ac-maintenance',
            title='AC Maintenance',
            description=(
                f"Your cooling sensitivity is very high ({analysis.cooling_slope:.1f} kWh per "
                f"degree of heat). Ensure your AC filter is clean and the unit is serviced."
            ),
            impact=Impact.HIGH,
            category=Category.COOLING,
        ))

    return recommendations
