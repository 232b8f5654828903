"""
Tests for price providers and get_symbols (no network access)
"""
import zipfile

import numpy as np
import pandas as pd
import pytest

from ohlcutils.data_loaders import LeanZipProvider, YahooProvider, get_symbols, parse_date
from ohlcutils.errors import DataUnavailable, InvalidArgument
from ohlcutils.series import make_ohlc


def _write_lean_day(root, symbol, date_str, rows):
    symbol_dir = root / symbol.lower()
    symbol_dir.mkdir(parents=True, exist_ok=True)
    csv = "\n".join(",".join(str(v) for v in row) for row in rows)
    with zipfile.ZipFile(symbol_dir / f"{date_str}_trade.zip", "w") as zf:
        zf.writestr(f"{date_str}_{symbol.lower()}_minute_trade.csv", csv)


class FakeYFinance:
    """Stands in for the yfinance module"""

    def __init__(self, frames):
        self.frames = list(frames)
        self.calls = []

    def download(self, symbol, **kwargs):
        self.calls.append((symbol, kwargs))
        return self.frames.pop(0)


def _yahoo_frame(multi_level=False):
    index = pd.DatetimeIndex(["2024-01-02", "2024-01-03"], name="Date")
    frame = pd.DataFrame({
        "Adj Close": [18.0, 19.0],
        "Close": [20.0, 20.0],
        "High": [21.0, 22.0],
        "Low": [19.0, 18.0],
        "Open": [19.5, 20.5],
        "Volume": [1000, 2000],
    }, index=index)
    if multi_level:
        frame.columns = pd.MultiIndex.from_product([frame.columns, ["MSFT"]], names=["Price", "Ticker"])
    return frame


class TestLeanZipProvider:

    def test_reads_minute_archives(self, tmp_path):
        _write_lean_day(tmp_path, "SPY", "20240304", [
            [34200000, 4700000, 4710000, 4690000, 4705000, 100],
            [34260000, 4705000, 4720000, 4700000, 4715000, 200],
        ])
        _write_lean_day(tmp_path, "SPY", "20240305", [
            [34200000, 4715000, 4730000, 4710000, 4725000, 300],
        ])
        ohlc = LeanZipProvider(str(tmp_path)).fetch("SPY", "2024-03-01", "2024-03-10")
        assert list(ohlc.columns) == ["SPY.Open", "SPY.High", "SPY.Low", "SPY.Close",
                                      "SPY.Volume", "SPY.Adjusted"]
        assert list(ohlc.index) == [pd.Timestamp("2024-03-04 09:30"), pd.Timestamp("2024-03-04 09:31"),
                                    pd.Timestamp("2024-03-05 09:30")]
        np.testing.assert_allclose(ohlc.iloc[0].to_numpy(), [470.0, 471.0, 469.0, 470.5, 100.0, 470.5])
        np.testing.assert_array_equal(ohlc["SPY.Adjusted"].to_numpy(), ohlc["SPY.Close"].to_numpy())

    def test_date_range_filters_days(self, tmp_path):
        _write_lean_day(tmp_path, "SPY", "20240304", [[34200000, 1, 1, 1, 1, 1]])
        _write_lean_day(tmp_path, "SPY", "20240305", [[34200000, 2, 2, 2, 2, 2]])
        ohlc = LeanZipProvider(str(tmp_path)).fetch("SPY", "2024-03-05", "2024-03-05")
        assert len(ohlc) == 1

    def test_missing_symbol_directory(self, tmp_path):
        with pytest.raises(DataUnavailable, match="Path not found"):
            LeanZipProvider(str(tmp_path)).fetch("IWM", "2024-03-01", "2024-03-10")

    def test_no_days_in_range(self, tmp_path):
        _write_lean_day(tmp_path, "SPY", "20240304", [[34200000, 1, 1, 1, 1, 1]])
        with pytest.raises(DataUnavailable, match="No data found"):
            LeanZipProvider(str(tmp_path)).fetch("SPY", "2025-01-01", "2025-01-05")


class TestYahooProvider:

    @pytest.mark.parametrize("multi_level", [False, True])
    def test_normalizes_columns(self, multi_level):
        provider = YahooProvider()
        provider._yf = FakeYFinance([_yahoo_frame(multi_level)])
        ohlc = provider.fetch("MSFT", "2024-01-01", "2024-01-05")
        assert list(ohlc.columns) == ["MSFT.Open", "MSFT.High", "MSFT.Low", "MSFT.Close",
                                      "MSFT.Volume", "MSFT.Adjusted"]
        np.testing.assert_array_equal(ohlc.iloc[0].to_numpy(), [19.5, 21.0, 19.0, 20.0, 1000.0, 18.0])
        symbol, kwargs = provider._yf.calls[0]
        assert symbol == "MSFT"
        assert kwargs["start"] == "2024-01-01" and kwargs["auto_adjust"] is False

    def test_retries_then_succeeds(self, monkeypatch):
        monkeypatch.setattr("ohlcutils.data_loaders.time.sleep", lambda s: None)
        provider = YahooProvider(max_retries=3)
        provider._yf = FakeYFinance([pd.DataFrame(), _yahoo_frame()])
        assert len(provider.fetch("MSFT", "2024-01-01", "2024-01-05")) == 2
        assert len(provider._yf.calls) == 2

    def test_gives_up_after_retries(self, monkeypatch):
        monkeypatch.setattr("ohlcutils.data_loaders.time.sleep", lambda s: None)
        provider = YahooProvider(max_retries=2)
        provider._yf = FakeYFinance([pd.DataFrame(), pd.DataFrame()])
        with pytest.raises(DataUnavailable, match="No data returned for MSFT"):
            provider.fetch("MSFT", "2024-01-01", "2024-01-05")

    def test_missing_columns(self):
        provider = YahooProvider()
        provider._yf = FakeYFinance([_yahoo_frame().drop(columns=["Adj Close"])])
        with pytest.raises(DataUnavailable, match="Adj Close"):
            provider.fetch("MSFT", "2024-01-01", "2024-01-05")


class StaticProvider:

    def __init__(self, frames):
        self.frames = frames
        self.requests = []

    def fetch(self, symbol, start, end):
        self.requests.append((symbol, start, end))
        return self.frames[symbol]


class TestGetSymbols:

    def test_saves_adjusted_prices(self, daily_ohlc):
        provider = StaticProvider({"SPY": daily_ohlc})
        env_out = {}
        saved = get_symbols(["SPY"], env_out, start_date="2024-01-01", end_date="2024-02-01",
                            provider=provider)
        assert saved == ["SPY"]
        assert provider.requests == [("SPY", "2024-01-01", "2024-02-01")]
        np.testing.assert_allclose(env_out["SPY"]["SPY.Close"].to_numpy(),
                                   daily_ohlc["SPY.Adjusted"].to_numpy())

    def test_single_symbol_string(self):
        ohlc = make_ohlc("XOM", [[10.0, 11.0, 9.0, 10.0, 5.0, 10.0]])
        env_out = {}
        assert get_symbols("XOM", env_out, provider=StaticProvider({"XOM": ohlc})) == ["XOM"]
        assert "XOM" in env_out

    def test_provider_errors_propagate(self):
        with pytest.raises(KeyError):
            get_symbols(["XOM"], {}, end_date="2024-01-01", provider=StaticProvider({}))


def test_parse_date():
    assert parse_date("2024-03-05").day == 5
    assert parse_date(pd.Timestamp("2024-03-05").date()).month == 3
    with pytest.raises(InvalidArgument):
        parse_date("05/03/2024")
