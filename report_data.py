# report_data.py
# Loading, aggregating, joining and bucketing for the UNICEF report.
# Every function returns a new DataFrame; inputs are never modified.

import importlib.util
import os
from importlib.machinery import SourceFileLoader
from pathlib import Path

import pandas as pd

import report_hook

INDICATOR_NEED = {"country", "indicator", "year", "obs_value"}
METADATA_NEED = {"country", "year", "gdp_per_capita", "population", "life_expectancy"}
METADATA_MEASURES = ["gdp_per_capita", "population", "life_expectancy"]
WORLD_NEED = {"name", "iso_a3"}


# -----------------------------
# Settings
# -----------------------------

def load_hook(py_path, alias="report_hook_loaded"):
    """Load a settings module from any file path (same names as report_hook.py)."""
    if not os.path.exists(py_path):
        raise FileNotFoundError(f"Settings file not found: {py_path}")
    if os.path.isdir(py_path):
        raise IsADirectoryError(f"Expected a file, found directory: {py_path}")

    # SourceFileLoader so any extension works (.pylocal, .txt, etc.)
    loader = SourceFileLoader(alias, py_path)
    spec = importlib.util.spec_from_loader(alias, loader)
    if spec is None or spec.loader is None:
        raise ImportError(f"Could not create import spec for {py_path}")

    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    return mod


# -----------------------------
# Loader
# -----------------------------

def load_table(path):
    """Read a CSV as-is: names from the header row, dtypes inferred per column."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(
            f"{path} not found. Put the UNICEF exports next to report_hook.py "
            f"or point DATA_DIR at them."
        )
    return pd.read_csv(path)


def _require(df, need, path):
    missing = need - set(df.columns)
    if missing:
        raise ValueError(f"Missing columns in {path}: {sorted(missing)}")


def load_indicator(path, hook=report_hook):
    df = load_table(path).rename(columns=hook.INDICATOR_COLUMNS)
    _require(df, INDICATOR_NEED, path)
    df["year"] = pd.to_numeric(df["year"], errors="coerce").astype("Int64")
    df["obs_value"] = pd.to_numeric(df["obs_value"], errors="coerce")
    return df


def load_metadata(path, hook=report_hook):
    df = load_table(path).rename(columns=hook.METADATA_COLUMNS)
    _require(df, METADATA_NEED, path)
    df["year"] = pd.to_numeric(df["year"], errors="coerce").astype("Int64")
    for col in METADATA_MEASURES:
        df[col] = pd.to_numeric(df[col], errors="coerce")
    return df


def load_world_reference(path):
    """Country name -> ISO-3 table in Natural Earth naming (see prepare_world_reference.py)."""
    df = load_table(path)
    _require(df, WORLD_NEED, path)
    return df


def load_tables(hook=report_hook):
    """Read every input once. The returned frames are treated as read-only."""
    base = Path(hook.DATA_DIR)
    tables = {
        "indicator_1": load_indicator(base / hook.INDICATOR_1_FILE, hook),
        "indicator_2": load_indicator(base / hook.INDICATOR_2_FILE, hook),
        "metadata": load_metadata(base / hook.METADATA_FILE, hook),
        "world": load_world_reference(base / hook.WORLD_FILE),
    }
    print("✅ Loaded: " + ", ".join(f"{k} ({len(v):,} rows)" for k, v in tables.items()))
    return tables


# -----------------------------
# Aggregator
# -----------------------------

def filter_indicator(df, value):
    """Rows whose indicator text equals `value` exactly (case and whitespace count)."""
    out = df.loc[df["indicator"] == value].copy()
    if out.empty:
        print(f"  ⚠️ No rows for indicator '{value}'")
    return out


def summarise(df, by, value, how="mean", indicator=None, name=None):
    """
    One row per distinct `by` value with the mean or sum of `value`.
    Missing values are skipped, never counted as zero; an all-missing group
    gives NaN for a mean and 0 for a sum.
    """
    if how not in ("mean", "sum"):
        raise ValueError(f"Unknown aggregation '{how}', expected 'mean' or 'sum'")
    if indicator is not None:
        df = filter_indicator(df, indicator)

    grouped = df.groupby(by, as_index=False)[value]
    out = grouped.mean() if how == "mean" else grouped.sum()
    if name:
        out = out.rename(columns={value: name})
    return out


def count_missing(df, by, value, name="missing"):
    """Number of missing `value` cells per `by` group."""
    flags = df.assign(_missing=df[value].isna())
    out = flags.groupby(by, as_index=False)["_missing"].sum()
    out["_missing"] = out["_missing"].astype(int)
    return out.rename(columns={"_missing": name})


# -----------------------------
# Joiner
# -----------------------------

def apply_aliases(df, column, aliases):
    out = df.copy()
    if aliases:
        out[column] = out[column].replace(aliases)
    return out


def left_join(left, right, left_on, right_on=None):
    """
    Keep every left row; unmatched rows get NaN on the right-hand columns.
    Duplicate right keys fan out into duplicate left rows (not deduplicated).
    """
    if right_on is None or right_on == left_on:
        return pd.merge(left, right, how="left", on=left_on)
    return pd.merge(left, right, how="left", left_on=left_on, right_on=right_on)


# -----------------------------
# Bucketizer
# -----------------------------

def bucketize(values,
              breaks=report_hook.LIFE_EXPECTANCY_BREAKS,
              labels=report_hook.LIFE_EXPECTANCY_LABELS,
              fill=report_hook.MISSING_LIFE_EXPECTANCY):
    """
    Cut values into ordinal labels over right-closed intervals, e.g.
    (0,70] low, (70,80] middle, (80,inf) high. Missing values are replaced by
    `fill` first (fill=None keeps them missing). Scalar in, label out.
    """
    if values is None or pd.api.types.is_scalar(values):
        one = pd.to_numeric(pd.Series([values], dtype=object), errors="coerce").astype(float)
        out = bucketize(one, breaks, labels, fill)
        label = out.iloc[0]
        return None if pd.isna(label) else str(label)

    s = pd.Series(values, dtype=float)
    if fill is not None:
        s = s.fillna(fill)
    return pd.cut(s, bins=list(breaks), labels=list(labels), right=True)


# -----------------------------
# Chart frames
# -----------------------------

def map_frame(tables, hook=report_hook):
    """World reference left-joined to mean life expectancy, with a bucket per country."""
    life = summarise(tables["metadata"], "country", "life_expectancy", how="mean")
    life = apply_aliases(life, "country", hook.COUNTRY_ALIASES)

    world = tables["world"]
    unmatched = sorted(set(life["country"].dropna()) - set(world["name"].dropna()))
    if unmatched:
        print(f"  ⚠️ No map shape for {len(unmatched)} countries:\n   ", unmatched)

    out = left_join(world, life, left_on="name", right_on="country")
    out["bucket"] = bucketize(
        out["life_expectancy"],
        hook.LIFE_EXPECTANCY_BREAKS,
        hook.LIFE_EXPECTANCY_LABELS,
        hook.MISSING_LIFE_EXPECTANCY,
    )
    return out


def bar_frame(tables, hook=report_hook, indicator=None, top_n=None):
    """Indicator 1 averaged by country, highest first."""
    label = indicator or hook.INDICATOR_1_LABEL
    top_n = hook.BAR_TOP_N if top_n is None else top_n

    rows = filter_indicator(tables["indicator_1"], label)
    means = summarise(rows, "country", "obs_value")
    missing = count_missing(rows, "country", "obs_value")
    out = left_join(means, missing, "country")
    out = out.sort_values("obs_value", ascending=False, na_position="last")
    return out.head(top_n).reset_index(drop=True)


def scatter_frame(tables, hook=report_hook):
    """Indicator 2 mean by country next to mean GDP per capita."""
    ind = summarise(tables["indicator_2"], "country", "obs_value",
                    indicator=hook.INDICATOR_2_LABEL)
    gdp = summarise(tables["metadata"], "country", "gdp_per_capita")
    return left_join(ind, gdp, "country")


def timeseries_frame(tables, hook=report_hook, years=None):
    """Total population and mean life expectancy per year, plus the overlay columns."""
    meta = tables["metadata"]
    if years is not None:
        lo, hi = years
        keep = meta["year"].between(lo, hi).fillna(False).astype(bool)
        meta = meta.loc[keep]

    pop = summarise(meta, "year", "population", how="sum")
    life = summarise(meta, "year", "life_expectancy", how="mean")
    out = left_join(pop, life, "year")
    # cosmetic rescaling for the overlay, not a unit conversion
    out["population_scaled"] = out["population"] / hook.POPULATION_DIVISOR
    out["life_expectancy_scaled"] = out["life_expectancy"] / hook.LIFE_EXPECTANCY_DIVISOR
    return out


def _describe(s):
    return {
        "count": int(s.notna().sum()),
        "missing": int(s.isna().sum()),
        "mean": s.mean(),
        "median": s.median(),
        "std": s.std(),
        "min": s.min(),
        "max": s.max(),
    }


def describe_tables(tables, hook=report_hook):
    """Descriptive statistics for every indicator label and metadata measure."""
    rows = []
    for key, filename in (("indicator_1", hook.INDICATOR_1_FILE),
                          ("indicator_2", hook.INDICATOR_2_FILE)):
        for label, g in tables[key].groupby("indicator", sort=True):
            rows.append({"source": filename, "measure": label, **_describe(g["obs_value"])})

    for col in METADATA_MEASURES:
        rows.append({"source": hook.METADATA_FILE, "measure": col,
                     **_describe(tables["metadata"][col])})

    cols = ["source", "measure", "count", "missing", "mean", "median", "std", "min", "max"]
    return pd.DataFrame(rows, columns=cols)
