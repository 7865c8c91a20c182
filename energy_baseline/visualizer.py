"""Charts of the unified daily data and the degree-day fits."""

import logging
from typing import Optional

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns

from .config import DEFAULT_CONFIG, EnergyConfig
from .models import RegimeFits

logger = logging.getLogger(__name__)

COLORS = {
    'electric': '#1e3d59',
    'gas': '#f95738',
    'total': '#556983',
    'heating': '#4a90d9',
    'cooling': '#ff6b6b',
    'temperature': '#4ecdc4',
}

VIEW_MODES = {
    'combined_kwh': ('total_kwh', 'Total Energy (kWh)'),
    'electric': ('electric_kwh', 'Electric (kWh)'),
    'gas': ('gas_therms', 'Gas (Therms)'),
}


class Visualizer:
    """Plots built from ``unify.to_frame`` output."""

    def __init__(self, frame: pd.DataFrame, fits: Optional[RegimeFits] = None,
                 config: EnergyConfig = DEFAULT_CONFIG):
        self.frame = frame
        self.fits = fits
        self.config = config
        sns.set_palette('husl')

    @staticmethod
    def _finish(fig, save_path: Optional[str], show: bool):
        fig.tight_layout()
        if save_path:
            fig.savefig(save_path, dpi=150, bbox_inches='tight')
            logger.info(f"Plot saved to: {save_path}")
        if show:
            plt.show()

    def plot_daily_usage(self, view_mode: str = 'combined_kwh', save_path: Optional[str] = None,
                         show: bool = True):
        """Daily energy bars with mean outdoor temperature on a second axis."""
        if view_mode not in VIEW_MODES:
            raise ValueError(f"Unknown view mode {view_mode!r}, expected one of {sorted(VIEW_MODES)}")
        column, label = VIEW_MODES[view_mode]

        fig, ax = plt.subplots(figsize=(14, 6))
        color = COLORS['gas'] if view_mode == 'gas' else COLORS['electric']
        ax.bar(self.frame.index, self.frame[column], color=color, alpha=0.8, label=label)
        ax.set_ylabel(label, fontweight='bold')
        ax.set_xlabel('Date')
        ax.grid(True, alpha=0.3)

        temps = self.frame['mean_temp_f'].astype(float)
        if temps.notna().any():
            ax2 = ax.twinx()
            ax2.plot(self.frame.index, temps, color=COLORS['temperature'], linewidth=2,
                     label='Mean Temp (°F)')
            ax2.set_ylabel('Mean Temperature (°F)', fontweight='bold')

        ax.set_title('Daily Energy Usage', fontweight='bold')
        self._finish(fig, save_path, show)
        return fig, ax

    def plot_degree_day_fit(self, save_path: Optional[str] = None, show: bool = True):
        """Total kWh against HDD and CDD for the heating and cooling regimes."""
        fig, (ax_h, ax_c) = plt.subplots(1, 2, figsize=(14, 5))

        panels = [
            (ax_h, 'heating', 'hdd', 'Heating Degree Days (°F·day)'),
            (ax_c, 'cooling', 'cdd', 'Cooling Degree Days (°F·day)'),
        ]
        for ax, regime, column, xlabel in panels:
            days = self.frame[self.frame['regime'] == regime]
            ax.scatter(days[column].astype(float), days['total_kwh'].astype(float),
                       alpha=0.6, s=15, color=COLORS[regime])

            fit = getattr(self.fits, regime) if self.fits is not None else None
            title = f"{regime.title()} Regime"
            if fit is not None and fit.n_points >= self.config.min_regression_points:
                x = np.linspace(0, float(days[column].max()), 50)
                ax.plot(x, fit.intercept + fit.slope * x, '--', color='black', linewidth=2)
                title += f"\nslope = {fit.slope:.2f} kWh/DD, R² = {fit.r_squared or 0.0:.3f}"

            ax.set_xlabel(xlabel, fontweight='bold')
            ax.set_ylabel('Total Energy (kWh)', fontweight='bold')
            ax.set_title(title, fontweight='bold')
            ax.grid(True, alpha=0.3)

        self._finish(fig, save_path, show)
        return fig, (ax_h, ax_c)
