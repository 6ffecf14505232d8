import sys

import pandas as pd
from pandas_datareader import wb

OUT_FILE = "world_countries.csv"

# World Bank name -> Natural Earth (medium scale) name, where the two differ.
# The map joins on these names, so they must match Natural Earth exactly.
NATURAL_EARTH_NAMES = {
    "United States": "United States of America",
    "Russian Federation": "Russia",
    "Egypt, Arab Rep.": "Egypt",
    "Iran, Islamic Rep.": "Iran",
    "Korea, Rep.": "South Korea",
    "Korea, Dem. People's Rep.": "North Korea",
    "Venezuela, RB": "Venezuela",
    "Yemen, Rep.": "Yemen",
    "Syrian Arab Republic": "Syria",
    "Lao PDR": "Laos",
    "Viet Nam": "Vietnam",
    "Congo, Dem. Rep.": "Dem. Rep. Congo",
    "Congo, Rep.": "Congo",
    "Gambia, The": "Gambia",
    "Bahamas, The": "Bahamas",
    "Kyrgyz Republic": "Kyrgyzstan",
    "Slovak Republic": "Slovakia",
    "Turkiye": "Turkey",
    "Cote d'Ivoire": "Côte d'Ivoire",
    "Central African Republic": "Central African Rep.",
    "South Sudan": "S. Sudan",
    "Bosnia and Herzegovina": "Bosnia and Herz.",
    "Dominican Republic": "Dominican Rep.",
    "Equatorial Guinea": "Eq. Guinea",
    "Solomon Islands": "Solomon Is.",
    "Eswatini": "eSwatini",
    "Brunei Darussalam": "Brunei",
    "Micronesia, Fed. Sts.": "Micronesia",
    "Hong Kong SAR, China": "Hong Kong",
    "Macao SAR, China": "Macao",
    "West Bank and Gaza": "Palestine",
}


def get_countries_table():
    """Get WB countries, filter out aggregates, keep ISO-3, region and canonical names."""
    c = wb.get_countries()
    c = c[c["region"] != "Aggregates"][["name", "iso3c", "region"]]
    c = c.rename(columns={"iso3c": "iso_a3"})
    return c


def to_natural_earth(countries_df):
    out = countries_df.copy()
    out["name"] = out["name"].replace(NATURAL_EARTH_NAMES)
    return out.sort_values("name").reset_index(drop=True)


def main(out_file=OUT_FILE):
    print("Fetching WB country list")
    try:
        countries_df = get_countries_table()
    except Exception as e:
        print(f"  ⚠️ WB failed: {e}")
        countries_df = pd.DataFrame([])

    if countries_df.empty:
        raise RuntimeError("No countries retrieved. Check network or try again later.")

    world = to_natural_earth(countries_df)
    world.to_csv(out_file, index=False)

    renamed = sorted(set(countries_df["name"]) & set(NATURAL_EARTH_NAMES))
    print(f"\n✅ Wrote: {out_file} ({len(world)} countries, {len(renamed)} renamed to Natural Earth names)")
    return world


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else OUT_FILE)
