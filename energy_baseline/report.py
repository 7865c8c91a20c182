"""Plain-text executive summary of an analysis run."""

from typing import List, Optional

from .models import AnalysisResult, Impact, Recommendation, RegimeFits

# Days per month used for the thermostat setback estimate
DAYS_PER_MONTH = 30

IMPACT_LABELS = {
    Impact.HIGH: 'HIGH',
    Impact.MEDIUM: 'MEDIUM',
    Impact.LOW: 'LOW',
}


class ReportGenerator:
    """Generate the analysis summary shown to the homeowner."""

    def __init__(self, analysis: AnalysisResult, recommendations: List[Recommendation],
                 fits: Optional[RegimeFits] = None):
        self.analysis = analysis
        self.recommendations = recommendations
        self.fits = fits

    def setback_savings_kwh(self) -> float:
        """Monthly winter kWh saved by lowering the thermostat 1°F."""
        return self.analysis.heating_slope * DAYS_PER_MONTH

    def _sensitivity_lines(self) -> List[str]:
        a = self.analysis
        lines = [
            f"• Daily Base Load: {a.base_load_kwh:.1f} kWh "
            f"(estimated \"always on\" usage, {a.shoulder_days} mild days)",
            f"• Heating Sensitivity: {a.heating_slope:.2f} kWh per HDD "
            f"({a.heating_days} heating days, R² = {a.r_squared:.3f})",
        ]
        if a.r_squared > 0.5:
            lines.append("  High correlation with cold weather detected")

        cooling = f"{a.cooling_slope:.2f}" if a.cooling_slope > 0 else '--'
        lines.append(f"• Cooling Sensitivity: {cooling} kWh per CDD ({a.cooling_days} cooling days)")

        if self.fits is not None:
            cooling_r2 = self.fits.cooling.r_squared or 0.0
            lines.append(f"• Cooling Fit R²: {cooling_r2:.3f}")
            lines.append(f"• Weather Correlation: {self.fits.temperature_correlation:.3f}")
        return lines

    def summary_text(self) -> str:
        lines = [
            '=' * 70,
            'HOME ENERGY BASELINE ANALYSIS',
            '=' * 70,
            '',
            'WEATHER SENSITIVITY:',
            *self._sensitivity_lines(),
            '',
            'HEATING INSIGHT:',
            f"• At {self.analysis.heating_slope:.2f} kWh/degree, lowering your thermostat by 1°F "
            f"could save approx {self.setback_savings_kwh():.0f} kWh per month in winter.",
            '',
            'RECOMMENDATIONS:',
        ]

        if not self.recommendations:
            lines.append('• No specific issues detected. Your usage looks efficient.')
        for i, rec in enumerate(self.recommendations, 1):
            lines.append(f"{i}. [{IMPACT_LABELS[rec.impact]}] {rec.title} ({rec.category.value})")
            lines.append(f"   {rec.description}")

        lines.append('=' * 70)
        return '\n'.join(lines)

    def print_summary(self):
        print(self.summary_text())
