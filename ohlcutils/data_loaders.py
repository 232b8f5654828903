# data_loaders.py
import os
import time
import zipfile
from datetime import datetime, timedelta

import pandas as pd

from .config import DEFAULT_START_DATE, LEAN_PRICE_SCALE, OHLC_FIELDS
from .errors import DataUnavailable, InvalidArgument
from .ohlc import adjust_ohlc
from .series import make_ohlc


def parse_date(s) -> datetime:
    if isinstance(s, datetime):
        return s
    if hasattr(s, 'year') and hasattr(s, 'month') and hasattr(s, 'day'):
        return datetime(s.year, s.month, s.day)
    try:
        return datetime.strptime(str(s), '%Y-%m-%d')
    except ValueError:
        raise InvalidArgument(f"Dates must be YYYY-mm-dd, got {s!r}") from None


class YahooProvider:
    """
    Daily OHLC prices from Yahoo Finance (via yfinance)

    fetch() returns columns SYMBOL.Open ... SYMBOL.Adjusted, unadjusted prices
    plus the adjusted close.
    """

    def __init__(self, max_retries=3, pause=1.0):
        self._yf = None
        self.max_retries = max_retries
        self.pause = pause

    def _get_yf(self):
        """Lazy load yfinance to avoid import overhead."""
        if self._yf is None:
            import yfinance as yf
            self._yf = yf
        return self._yf

    def fetch(self, symbol, start, end):
        yf = self._get_yf()
        data = None
        for attempt in range(self.max_retries):
            try:
                data = yf.download(
                    symbol,
                    start=parse_date(start).strftime('%Y-%m-%d'),
                    end=parse_date(end).strftime('%Y-%m-%d'),
                    auto_adjust=False,
                    progress=False,
                )
                if data is None or len(data) == 0:
                    raise DataUnavailable(f"No data returned for {symbol}")
                break
            except Exception as e:
                if attempt < self.max_retries - 1:
                    wait_time = self.pause * 2 ** attempt
                    print(f"⚠ Fetch failed for {symbol}: {e}, retrying in {wait_time}s...")
                    time.sleep(wait_time)
                else:
                    raise
        return self._normalize(symbol, data)

    @staticmethod
    def _normalize(symbol, data):
        # newer yfinance returns (field, ticker) columns even for one ticker
        if isinstance(data.columns, pd.MultiIndex):
            data = data.copy()
            data.columns = data.columns.get_level_values(0)
        yahoo_fields = ['Open', 'High', 'Low', 'Close', 'Volume', 'Adj Close']
        missing = [f for f in yahoo_fields if f not in data.columns]
        if missing:
            raise DataUnavailable(f"Download for {symbol} is missing columns: {missing}")
        index = pd.DatetimeIndex(data.index)
        if index.tz is not None:
            index = index.tz_localize(None)
        return make_ohlc(symbol, data[yahoo_fields].to_numpy(dtype=float), index=index,
                         fields=OHLC_FIELDS)


class LeanZipProvider:
    """
    Minute OHLC prices from QuantConnect Lean zip archives on disk

    Layout: <data_path>/<symbol>/<YYYYMMDD>_trade.zip holding
    <YYYYMMDD>_<symbol>_minute_trade.csv. Timestamps are milliseconds from
    midnight and prices are scaled by 10000. Adjusted equals Close.
    """

    def __init__(self, data_path):
        self.data_path = data_path

    def fetch(self, symbol, start, end):
        symbol_path = os.path.join(self.data_path, symbol.lower())
        if not os.path.exists(symbol_path):
            raise DataUnavailable(f"Path not found for {symbol}: {symbol_path}")

        all_data = []
        current_date = parse_date(start)
        end_date = parse_date(end)
        while current_date <= end_date:
            date_str = current_date.strftime('%Y%m%d')
            zip_file = os.path.join(symbol_path, f"{date_str}_trade.zip")
            csv_file_in_zip = f"{date_str}_{symbol.lower()}_minute_trade.csv"

            # days without a file are weekends and holidays
            if os.path.exists(zip_file):
                with zipfile.ZipFile(zip_file, 'r') as zip_ref:
                    with zip_ref.open(csv_file_in_zip) as csv_file:
                        df = pd.read_csv(csv_file, header=None,
                                         names=['time', 'open', 'high', 'low', 'close', 'volume'])
                df.index = pd.to_datetime(date_str, format='%Y%m%d') + pd.to_timedelta(df['time'], unit='ms')
                all_data.append(df)

            current_date += timedelta(days=1)

        if not all_data:
            raise DataUnavailable(f"No data found for {symbol} between {start} and {end}")

        df = pd.concat(all_data)
        prices = df[['open', 'high', 'low', 'close']] / LEAN_PRICE_SCALE
        values = pd.concat([prices, df['volume'], prices['close']], axis=1).to_numpy(dtype=float)
        return make_ohlc(symbol.upper(), values, index=pd.DatetimeIndex(df.index), fields=OHLC_FIELDS)


def get_symbols(symbols, env_out, start_date=DEFAULT_START_DATE, end_date=None, provider=None):
    """
    Download OHLC prices, adjust them and save them into a symbol mapping

    Args:
        symbols: list of tickers
        env_out: mapping receiving one adjusted OHLC DataFrame per symbol
        start_date: start date, "YYYY-mm-dd" or a date
        end_date: end date (default: today)
        provider: object with fetch(symbol, start, end) (default: YahooProvider)

    Returns:
        list of symbols saved into env_out
    """
    if isinstance(symbols, str):
        symbols = [symbols]
    if provider is None:
        provider = YahooProvider()
    if end_date is None:
        end_date = datetime.today().strftime('%Y-%m-%d')

    saved = []
    for symbol in symbols:
        print(f"Loading data for {symbol}...")
        ohlc = provider.fetch(symbol, start_date, end_date)
        env_out[symbol] = adjust_ohlc(ohlc)
        saved.append(symbol)
        print(f"  Loaded {len(ohlc)} records for {symbol}")
    return saved
