# main_build.py
import os
import sys
import argparse

# Support both direct run and module import
if __name__ == '__main__':
    # Add parent directory for direct run
    sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    from ohlcutils.chart import chart_xts
    from ohlcutils.config import load_config
    from ohlcutils.data_loaders import LeanZipProvider, YahooProvider, get_symbols
    from ohlcutils.errors import InvalidArgument
    from ohlcutils.endpoints import calendar_endpoints, compute_endpoints, to_period
    from ohlcutils.rolling import rolling_max
    from ohlcutils.series import extract_column
else:
    # Module import
    from .chart import chart_xts
    from .config import load_config
    from .data_loaders import LeanZipProvider, YahooProvider, get_symbols
    from .errors import InvalidArgument
    from .endpoints import calendar_endpoints, compute_endpoints, to_period
    from .rolling import rolling_max
    from .series import extract_column


def make_provider(config):
    """Build the download provider named in the config"""
    name = str(config['provider']).lower()
    if name == 'yahoo':
        return YahooProvider(max_retries=config['max_retries'])
    if name == 'lean':
        return LeanZipProvider(config['lean_data_path'])
    raise InvalidArgument(f"Unknown provider \"{config['provider']}\", expected 'yahoo' or 'lean'")


def build(config, provider=None):
    """
    Download, adjust and aggregate every configured symbol

    Args:
        config: dict (see config.get_default_config)
        provider: download provider (default: built from config)

    Returns:
        dict symbol -> aggregated OHLC DataFrame
    """
    if provider is None:
        provider = make_provider(config)

    print("=" * 80)
    print("OHLC BUILD")
    print("=" * 80)
    print(f"Symbols: {config['symbols']}")
    print(f"Date range: {config['start_date']} to {config['end_date'] or 'today'}")
    if config['period']:
        print(f"Aggregation: every {config['period']}")
    else:
        print(f"Aggregation: {config['interval']} rows, offset {config['offset']}")
    print("=" * 80)

    # 1) Download and adjust
    raw = {}
    get_symbols(config['symbols'], raw, start_date=config['start_date'],
                end_date=config['end_date'], provider=provider)

    # 2) Aggregate over end points
    aggregated = {}
    for symbol, ohlc in raw.items():
        if config['period']:
            end_points = calendar_endpoints(ohlc.index, period=config['period'])
        else:
            end_points = compute_endpoints(len(ohlc), interval=config['interval'],
                                           offset=config['offset'])
        aggregated[symbol] = to_period(ohlc, end_points=end_points)
        high = rolling_max(extract_column(aggregated[symbol], 'High'), config['roll_window'])
        print(f"{symbol}: {len(ohlc)} rows -> {len(aggregated[symbol])} bars, "
              f"last {config['roll_window']}-bar high {high.iloc[-1, 0]:.2f}")

    # 3) Optional chart of the first symbol
    if config['chart'] and aggregated:
        symbol = config['symbols'][0]
        ax = chart_xts(aggregated[symbol])
        ax.figure.savefig(config['chart'])
        print(f"Saved chart of {symbol} to {config['chart']}")

    return aggregated


def main(argv=None):
    parser = argparse.ArgumentParser(description='Download and aggregate OHLC prices')
    parser.add_argument('--config', type=str, default=None,
                        help='YAML config file')
    parser.add_argument('--symbols', type=str, nargs='+', default=None,
                        help='Tickers to download')
    parser.add_argument('--start', type=str, default=None, help='Start date (YYYY-mm-dd)')
    parser.add_argument('--end', type=str, default=None, help='End date (YYYY-mm-dd)')
    parser.add_argument('--provider', type=str, choices=['yahoo', 'lean'], default=None)
    parser.add_argument('--interval', type=int, default=None, help='Rows per aggregated bar')
    parser.add_argument('--offset', type=int, default=None, help='Rows in the first stub bar')
    parser.add_argument('--period', type=str, default=None,
                        help='Calendar period per bar (days, weeks, months, ...)')
    parser.add_argument('--chart', type=str, default=None, help='Save a chart to this file')
    args = parser.parse_args(argv)

    config = load_config(args.config)
    overrides = {
        'symbols': args.symbols,
        'start_date': args.start,
        'end_date': args.end,
        'provider': args.provider,
        'interval': args.interval,
        'offset': args.offset,
        'period': args.period,
        'chart': args.chart,
    }
    config.update({k: v for k, v in overrides.items() if v is not None})
    build(config)
    return 0


if __name__ == '__main__':
    exit_code = main()
    sys.exit(exit_code)
