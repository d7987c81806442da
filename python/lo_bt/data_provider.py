"""Data providers (yfinance / CSV) producing a PriceSeries."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import pandas as pd

from .price_series import PriceSeries


def _pick_price_column(df: pd.DataFrame, price_label: str) -> pd.Series:
    # yfinance can return MultiIndex columns depending on options/version.
    # We standardize to a simple 1-level column index.
    if isinstance(df.columns, pd.MultiIndex):
        df = df.copy()
        tickers = list(dict.fromkeys(df.columns.get_level_values(-1)))
        if len(tickers) == 1:
            # single ticker → drop ticker level
            df.columns = df.columns.get_level_values(0)
        else:
            # multiple tickers → keep only the first ticker's fields
            df = df.xs(tickers[0], axis=1, level=-1, drop_level=True)

    wanted = price_label.strip().lower().replace(" ", "")
    for col in df.columns:
        if str(col).strip().lower().replace(" ", "") == wanted:
            price = df[col].astype(float)
            break
    else:
        raise ValueError(f"Missing price column {price_label!r}; have {list(df.columns)}")

    price = price[~price.index.duplicated(keep="last")].sort_index()
    return price.dropna()


def _select(price: pd.Series, start: Optional[str], end: Optional[str]) -> pd.Series:
    if start is not None or end is not None:
        price = price.loc[start:end]
    return price


class YfinanceProvider:
    """Fetch daily (or intraday) prices from yfinance."""

    def fetch(
        self,
        symbol: str,
        start: str,
        end: str,
        interval: str = "1d",
        price_label: str = "Close",
        auto_adjust: bool = False,
    ) -> PriceSeries:
        import yfinance as yf  # local import to keep dependency optional in some environments

        df = yf.download(
            tickers=symbol,
            start=start,
            end=end,
            interval=interval,
            auto_adjust=auto_adjust,
            progress=False,
        )
        if df is None or len(df) == 0:
            raise RuntimeError(f"yfinance returned empty data for symbol={symbol}")

        price = _pick_price_column(df, price_label)
        return PriceSeries.from_prices(price, symbol=symbol)


class CsvProvider:
    """Load prices from a CSV file (a datetime column plus a price column)."""

    def fetch(
        self,
        csv_path: str | Path,
        symbol: str,
        price_label: str = "close",
        datetime_col: str = "Date",
        start: Optional[str] = None,
        end: Optional[str] = None,
    ) -> PriceSeries:
        path = Path(csv_path)
        if not path.exists():
            raise FileNotFoundError(str(path))

        df = pd.read_csv(path)
        if datetime_col not in df.columns:
            # try common alternatives
            for cand in ["date", "Datetime", "datetime", "timestamp", "Time", "time"]:
                if cand in df.columns:
                    datetime_col = cand
                    break

        if datetime_col not in df.columns:
            raise ValueError(f"CSV must contain a datetime column. Tried '{datetime_col}' and common aliases.")

        df[datetime_col] = pd.to_datetime(df[datetime_col])
        df = df.set_index(datetime_col).sort_index()

        price = _select(_pick_price_column(df, price_label), start, end)
        return PriceSeries.from_prices(price, symbol=symbol)
