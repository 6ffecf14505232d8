# Report settings. Edit the right hand side of anything below; the report and
# the viewer read every value from here.

# Input / output files (relative to DATA_DIR)
DATA_DIR = "."
INDICATOR_1_FILE = "unicef_indicator_1.csv"
INDICATOR_2_FILE = "unicef_indicator_2.csv"
METADATA_FILE = "unicef_metadata.csv"
WORLD_FILE = "world_countries.csv"   # build it with prepare_world_reference.py
OUTPUT_FILE = "unicef_report.html"

# Column names as exported by the UNICEF data warehouse -> names used here
INDICATOR_COLUMNS = {
    "time_period": "year",
}
METADATA_COLUMNS = {
    "GDP per capita (constant 2015 US$)": "gdp_per_capita",
    "Population, total": "population",
    "Life expectancy at birth, total (years)": "life_expectancy",
}

# Exact indicator text used to filter each indicator file (no fuzzy matching!)
INDICATOR_1_LABEL = "Anaemia prevalence among women of reproductive age (15-49 years)"
INDICATOR_2_LABEL = "Under-five mortality rate"

# Indicator country name -> geographic reference name
COUNTRY_ALIASES = {
    "United States": "United States of America",
}

# Life expectancy buckets, right-closed: (0,70], (70,80], (80,inf)
LIFE_EXPECTANCY_BREAKS = (0, 70, 80, float("inf"))
LIFE_EXPECTANCY_LABELS = ("low", "middle", "high")
# Countries with no life expectancy value are drawn as if they had this one
MISSING_LIFE_EXPECTANCY = 70

# Colours
BUCKET_COLORS = {
    "low": "#d7301f",
    "middle": "#fdbb84",
    "high": "#1a9850",
}
NO_DATA_COLOR = "#d9d9d9"
BAR_COLOR = "#1cabe2"        # UNICEF cyan
SCATTER_COLOR = "#1cabe2"
FIT_COLOR = "#e2231a"
POPULATION_COLOR = "#374ea2"
LIFE_EXPECTANCY_COLOR = "#00833d"
MAP_PROJECTION = "natural earth"  # Try: "orthographic", "equirectangular", "mercator", "miller"

# Time series overlay: both lines are divided so they share one picture
POPULATION_DIVISOR = 1e8
LIFE_EXPECTANCY_DIVISOR = 100
TIME_SERIES_BREAKS = tuple(range(1960, 2021, 10))

# How many countries the bar chart shows
BAR_TOP_N = 20

# Friendly labels, used for axes, hovers and the summary table
LABELS = {
    "gdp_per_capita": "GDP per capita (constant 2015 US$)",
    "population": "Population, total",
    "life_expectancy": "Life expectancy at birth (years)",
    "obs_value": "Observed value",
    INDICATOR_1_LABEL: "Anaemia prevalence, women 15-49 (%)",
    INDICATOR_2_LABEL: "Under-five mortality (per 1,000 live births)",
}

REPORT_TITLE = "UNICEF Report: Health and Demographics Around the World"
