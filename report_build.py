# report_build.py
# Build the UNICEF narrative report as one HTML file.
#
#   python report_build.py [settings.py]
#
# Reads the three UNICEF CSVs and world_countries.csv named in report_hook.py
# (or in the settings file given) and writes OUTPUT_FILE next to them.

import html
import sys
import textwrap
from datetime import datetime
from pathlib import Path

import report_charts
import report_data
import report_hook

# (figure key, heading, prose). Shared with the Dash viewer.
SECTIONS = [
    ("map", "Where do people live longest?", """
        Each country is coloured by its average life expectancy at birth across
        every year in the metadata file: low (70 years or less), middle (above
        70 and up to 80) and high (above 80). Countries without any life
        expectancy value are drawn as if they sat at exactly 70 years, so they
        show up in the low group alongside countries that genuinely measure
        there. Read the low group with that in mind.
    """),
    ("bar", "Anaemia among women of reproductive age", """
        The bars show the countries with the highest average anaemia prevalence
        among women aged 15 to 49, averaged over every year reported. Years
        without a measurement are left out of the average rather than counted
        as zero; hover a bar to see how many were missing.
    """),
    ("scatter", "Child mortality and national income", """
        Every point is a country: its average GDP per capita against its
        average under-five mortality rate. The dashed line is a straight
        least-squares fit. Poorer countries tend to lose far more children
        before their fifth birthday, though the spread around the line is wide
        and the relationship is clearly not linear at the low-income end.
    """),
    ("timeseries", "Population and life expectancy over time", """
        Total population (summed over every country in the metadata file) and
        average life expectancy from 1960 to 2020. The two lines are rescaled
        (population divided by 100 million, life expectancy by 100) and sit on
        separate axes; the rescaling only lets both trends share one picture.
        Both climb steadily across the whole period.
    """),
    ("summary", "Summary statistics", """
        Count, missing values, mean, median, standard deviation and range for
        every indicator in the two indicator files and for each measure in the
        metadata file.
    """),
]

# The summary section is an HTML table, not a plotly figure.
CHART_KEYS = [key for key, _, _ in SECTIONS if key != "summary"]

PAGE = """<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>{title}</title>
    <style>
        body {{
            font-family: system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial;
            max-width: 1200px;
            margin: 0 auto;
            padding: 16px;
            color: #333;
        }}
        h1 {{ color: #1cabe2; }}
        .section {{ margin-bottom: 40px; }}
        .prose {{ line-height: 1.7; }}
        table.summary {{ border-collapse: collapse; width: 100%; font-size: 14px; }}
        table.summary th {{ background: #1cabe2; color: white; text-align: left; padding: 6px; }}
        table.summary td {{ border-bottom: 1px solid #eee; padding: 6px; }}
        .footer {{ font-size: 12px; color: #777; }}
    </style>
</head>
<body>
<h1>{title}</h1>
{body}
<p class="footer">Generated {generated}</p>
</body>
</html>
"""


def prose(text):
    return " ".join(textwrap.dedent(text).split())


def summary_table_html(stats, hook=report_hook):
    d = stats.copy()
    d["measure"] = d["measure"].map(lambda m: report_charts._label(hook, m))
    d.columns = [c.title() for c in d.columns]
    return d.to_html(index=False, classes="summary", border=0, na_rep="–",
                     float_format=lambda v: f"{v:,.4g}")


def render_report(tables, hook=report_hook):
    """The whole report as an HTML string."""
    figures = report_charts.build_figures(tables, hook, keys=CHART_KEYS)
    stats = report_data.describe_tables(tables, hook)

    parts = []
    plotlyjs_done = False
    for key, heading, text in SECTIONS:
        if key == "summary":
            content = summary_table_html(stats, hook)
        else:
            content = figures[key].to_html(full_html=False, include_plotlyjs=not plotlyjs_done)
            plotlyjs_done = True
        parts.append(
            f'<div class="section" id="{key}">\n'
            f"<h2>{html.escape(heading)}</h2>\n"
            f'<p class="prose">{html.escape(prose(text))}</p>\n'
            f"{content}\n</div>"
        )

    return PAGE.format(
        title=html.escape(hook.REPORT_TITLE),
        body="\n".join(parts),
        generated=datetime.now().strftime("%Y-%m-%d %H:%M"),
    )


def write_report(text, path):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def main(hook=report_hook, settings_path=None):
    if settings_path:
        hook = report_data.load_hook(settings_path)
        print(f"✅ Settings: {settings_path}")
    tables = report_data.load_tables(hook)
    out = write_report(render_report(tables, hook), Path(hook.DATA_DIR) / hook.OUTPUT_FILE)
    print(f"\n✅ Wrote: {out}")
    return out


if __name__ == "__main__":
    main(settings_path=sys.argv[1] if len(sys.argv) > 1 else None)
