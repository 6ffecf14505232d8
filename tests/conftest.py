"""Pytest configuration and shared fixtures for the UNICEF report tests.

This module provides fixtures for:
- A settings namespace pointing at a temporary data directory
- Small UNICEF-shaped CSV exports written to that directory
- The same tables already loaded, for tests that skip the loader
"""

from pathlib import Path
from types import SimpleNamespace

import numpy as np
import pandas as pd
import pytest

import report_data
import report_hook


# ============================================================================
# Settings Fixtures
# ============================================================================

@pytest.fixture
def hook(tmp_path: Path) -> SimpleNamespace:
    """Copy of report_hook with DATA_DIR in tmp_path and short indicator labels."""
    settings = {k: getattr(report_hook, k) for k in dir(report_hook) if k.isupper()}
    settings["DATA_DIR"] = str(tmp_path)
    settings["INDICATOR_1_LABEL"] = "X"
    settings["INDICATOR_2_LABEL"] = "Y"
    settings["LABELS"] = dict(report_hook.LABELS, X="Indicator X", Y="Indicator Y")
    return SimpleNamespace(**settings)


# ============================================================================
# Raw Export Fixtures
# ============================================================================

@pytest.fixture
def indicator_1_raw() -> pd.DataFrame:
    return pd.DataFrame({
        "country": ["A", "B", "A", "C", "C"],
        "indicator": ["X", "X", "Other", "X", "X"],
        "time_period": [2000, 2000, 2000, 2001, 2002],
        "obs_value": [60.0, 90.0, 5.0, np.nan, 40.0],
        "sex": ["Female"] * 5,
    })


@pytest.fixture
def indicator_2_raw() -> pd.DataFrame:
    return pd.DataFrame({
        "country": ["A", "A", "B", "United States"],
        "indicator": ["Y", "Y", "Y", "Y"],
        "time_period": [2000, 2001, 2000, 2000],
        "obs_value": [100.0, 80.0, 10.0, 7.0],
    })


@pytest.fixture
def metadata_raw() -> pd.DataFrame:
    return pd.DataFrame({
        "country": ["A", "A", "B", "B", "United States"],
        "year": [2000, 2001, 2000, 2001, 2000],
        "Population, total": [1e8, 1.1e8, 5e7, 5.1e7, 3e8],
        "GDP per capita (constant 2015 US$)": [1000.0, 1200.0, 40000.0, 42000.0, 50000.0],
        "Life expectancy at birth, total (years)": [60.0, 62.0, 85.0, np.nan, 78.0],
    })


@pytest.fixture
def world_raw() -> pd.DataFrame:
    return pd.DataFrame({
        "name": ["A", "B", "United States of America", "Atlantis"],
        "iso_a3": ["AAA", "BBB", "USA", "ATL"],
        "region": ["North", "South", "North America", "Sea"],
    })


@pytest.fixture
def data_dir(hook, indicator_1_raw, indicator_2_raw, metadata_raw, world_raw) -> Path:
    """Write the four inputs where `hook` expects them."""
    base = Path(hook.DATA_DIR)
    indicator_1_raw.to_csv(base / hook.INDICATOR_1_FILE, index=False)
    indicator_2_raw.to_csv(base / hook.INDICATOR_2_FILE, index=False)
    metadata_raw.to_csv(base / hook.METADATA_FILE, index=False)
    world_raw.to_csv(base / hook.WORLD_FILE, index=False)
    return base


@pytest.fixture
def tables(hook, data_dir) -> dict:
    return report_data.load_tables(hook)
