"""Command line entry point: CSV usage files in, summary and charts out."""

import argparse
import logging
import sys
from datetime import date
from typing import List, Optional

from .analysis import analyze, fit_regimes
from .config import EnergyConfig
from .errors import EnergyAnalysisError
from .ingest import load_usage_csv
from .models import UtilityType
from .recommendations import recommend
from .report import ReportGenerator
from .unify import hourly_profile, to_frame, unify
from .weather import get_coordinates, get_hourly_weather, load_weather_csv, weather_for_readings

logger = logging.getLogger(__name__)

VIEW_MODES = ['combined_kwh', 'electric', 'gas']


def setup_logging(level: str = 'INFO'):
    logging.basicConfig(level=getattr(logging, level.upper()),
                        format='%(asctime)s - %(levelname)s - %(message)s')
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('matplotlib').setLevel(logging.WARNING)


def _iso_date(text: str) -> date:
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a YYYY-MM-DD date: {text!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='energy-baseline',
        description='Estimate base load and heating/cooling sensitivity from utility exports.',
    )
    parser.add_argument('--electric', help='Electric usage CSV (kWh)')
    parser.add_argument('--gas', help='Gas usage CSV (Therms)')
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument('--zip', dest='zip_code', help='US zip code used to fetch weather history')
    source.add_argument('--weather', help='Daily weather CSV (date,mean_temp_f,min_temp_f,max_temp_f)')
    parser.add_argument('--timezone', default='UTC', help='Timezone used to assign readings to days')
    parser.add_argument('--plot', help='Save the degree-day chart to this path')
    parser.add_argument('--daily-plot', help='Save the daily usage chart to this path')
    parser.add_argument('--view-mode', default='combined_kwh', choices=VIEW_MODES,
                        help='Energy shown in the daily usage chart')
    parser.add_argument('--hour-profile', type=_iso_date, metavar='YYYY-MM-DD',
                        help='Print hourly usage and temperature for one day')
    parser.add_argument('--log-level', default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    return parser


def print_hour_profile(day: date, electric, gas, args: argparse.Namespace, config: EnergyConfig):
    """Hourly weather is only available from the archive, so a weather file gives no temperatures."""
    hourly_weather = []
    if args.zip_code:
        location = get_coordinates(args.zip_code, config)
        hourly_weather = get_hourly_weather(location.latitude, location.longitude, day, day, config)

    profile = hourly_profile(day, electric, gas, hourly_weather, config)
    print(f"\nHourly profile for {day.isoformat()} ({config.timezone})")
    print(profile.round(2).to_string())


def run(args: argparse.Namespace) -> int:
    if not args.electric and not args.gas:
        logger.error("At least one of --electric or --gas is required")
        return 2

    config = EnergyConfig(timezone=args.timezone)

    electric, gas = [], []
    if args.electric:
        electric, _ = load_usage_csv(args.electric, forced_type=UtilityType.ELECTRIC)
    if args.gas:
        gas, _ = load_usage_csv(args.gas, forced_type=UtilityType.GAS)

    if args.weather:
        weather = load_weather_csv(args.weather)
    else:
        weather = weather_for_readings(args.zip_code, electric + gas, config)

    days = unify(electric, gas, weather, config)
    analysis = analyze(days, config)
    fits = fit_regimes(days, config)
    recommendations = recommend(analysis)

    ReportGenerator(analysis, recommendations, fits).print_summary()

    if args.hour_profile:
        print_hour_profile(args.hour_profile, electric, gas, args, config)

    if args.plot or args.daily_plot:
        import matplotlib
        matplotlib.use('Agg')
        from .visualizer import Visualizer

        visualizer = Visualizer(to_frame(days, config), fits, config)
        if args.plot:
            visualizer.plot_degree_day_fit(save_path=args.plot, show=False)
        if args.daily_plot:
            visualizer.plot_daily_usage(args.view_mode, save_path=args.daily_plot, show=False)

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    try:
        return run(args)
    except EnergyAnalysisError as e:
        logger.error(f"Analysis failed: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
