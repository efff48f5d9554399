"""Generate the NYPD shooting incident trend report.

Outputs (in SHOOTING_OUTPUT_DIR, default ./report):
1. daily_cumulative.png - Cumulative non-murder shooting victims, citywide and by borough
2. yearly_counts.png - Yearly counts, citywide and by borough
3. yearly_pct_change.png - Year-over-year percent change, citywide
4. trend_citywide.png / trend_citywide_pred.png - Year vs citywide percent change (OLS)
5. trend_<borough>.png - Year vs borough percent change (OLS), where defined
6. compare_<y>_vs_<x>.png / compare_<y>_vs_<x>_pred.png - Borough percent change vs another's (OLS)
7. yearly_counts.csv, yearly_pct_change.csv, trend_models.csv - Summary tables
8. report.md - Narrative with the charts and regression summaries embedded
"""

from pathlib import Path

import pandas as pd

from .charts import plot_predicted_vs_actual, plot_series, plot_trend
from .config import load_settings
from .load import load_raw
from .pipeline import run_analysis
from .trend import format_trend


def slug(label):
    """File-name form of a borough label, e.g. 'STATEN ISLAND' -> 'staten_island'."""
    return label.lower().replace(' ', '_')


def fmt(val, spec='.2f'):
    """Format a number, or "n/a" for an undefined value."""
    if val is None or pd.isna(val):
        return 'n/a'
    return format(val, spec)


def summary_tables(results):
    """(yearly_counts, yearly_pct_change, trend_models) DataFrames for CSV export."""
    bundles = {'CITYWIDE': results['citywide'], **results['boroughs']}
    yearly = pd.DataFrame({label: b['yearly'] for label, b in bundles.items()}).fillna(0).astype('int64')
    yearly.index.name = 'year'
    pct = pd.DataFrame({label: b['yearly_pct_change'] for label, b in bundles.items()})
    pct.index.name = 'year'

    rows = []
    for label, b in bundles.items():
        rows.append(_model_row(f'Year vs {label} % change', b['year_trend'], b['year_trend_error']))
    for fit in results['comparisons']:
        rows.append(_model_row(f"{fit['y_boro']} % change vs {fit['x_boro']} % change", fit['model'], fit['error']))
    models = pd.DataFrame(rows, columns=['model', 'slope', 'intercept', 'r_squared', 'n_obs', 'error'])
    return yearly, pct, models


def _model_row(name, model, error):
    if model is None:
        return {'model': name, 'slope': None, 'intercept': None, 'r_squared': None, 'n_obs': None, 'error': error}
    return {'model': name, 'slope': model['slope'], 'intercept': model['intercept'],
            'r_squared': model['r_squared'], 'n_obs': model['n_obs'], 'error': None}


def render_charts(results, output_dir):
    """Write every chart. Returns {key: filename} for the ones written."""
    output_dir = Path(output_dir)
    citywide, boroughs = results['citywide'], results['boroughs']
    charts = {}

    print("\nChart: daily_cumulative.png")
    plot_series({'Citywide': citywide['daily_cumulative'],
                 **{b.title(): v['daily_cumulative'] for b, v in boroughs.items()}},
                'Cumulative Shooting Victims (non-murder)', 'Victims', output_dir / 'daily_cumulative.png',
                xlabel='Date')
    charts['daily_cumulative'] = 'daily_cumulative.png'

    print("\nChart: yearly_counts.png")
    plot_series({'Citywide': citywide['yearly'], **{b.title(): v['yearly'] for b, v in boroughs.items()}},
                'Shooting Victims per Year (non-murder)', 'Victims', output_dir / 'yearly_counts.png')
    charts['yearly_counts'] = 'yearly_counts.png'

    print("\nChart: yearly_pct_change.png")
    plot_series({'Citywide': citywide['yearly_pct_change']},
                'Year-over-Year Change in Shooting Victims', '% change', output_dir / 'yearly_pct_change.png')
    charts['yearly_pct_change'] = 'yearly_pct_change.png'

    # Chart specs: (key, model, title)
    trend_specs = [(f"trend_{slug(b['label'])}", b['year_trend'], f"Year vs {b['label'].title()} % Change")
                   for b in [citywide, *boroughs.values()]]
    trend_specs += [(f"compare_{slug(f['y_boro'])}_vs_{slug(f['x_boro'])}", f['model'],
                     f"{f['y_boro'].title()} vs {f['x_boro'].title()} % Change")
                    for f in results['comparisons']]

    for key, model, title in trend_specs:
        if model is None:
            continue
        print(f"\nChart: {key}.png")
        plot_trend(model, title, output_dir / f'{key}.png')
        plot_predicted_vs_actual(model, f'{title}: Predicted vs Actual', output_dir / f'{key}_pred.png')
        charts[key] = f'{key}.png'
        charts[f'{key}_pred'] = f'{key}_pred.png'
    return charts


def _trend_section(heading, key, model, error, charts):
    lines = [f'### {heading}', '']
    if model is None:
        lines += [f'Trend undefined: {error}', '']
        return lines
    direction = 'rising' if model['slope'] > 0 else 'falling' if model['slope'] < 0 else 'flat'
    lines += [
        f"`{format_trend(model)}`",
        '',
        '| slope | intercept | R² | n | pairs dropped |',
        '|---|---|---|---|---|',
        f"| {fmt(model['slope'], '.3f')} | {fmt(model['intercept'], '.3f')} | {fmt(model['r_squared'], '.3f')} "
        f"| {model['n_obs']} | {model['n_dropped']} |",
        '',
        f"The fitted line is {direction}; the linear fit explains {model['r_squared']:.0%} of the variance.",
        '',
        f'![{heading}]({charts[key]})',
        f'![{heading}: predicted vs actual]({charts[key + "_pred"]})',
        '',
    ]
    return lines


def render_markdown(results, charts):
    """Narrative report as Markdown text."""
    citywide = results['citywide']
    yearly = citywide['yearly']
    pct = citywide['yearly_pct_change']
    lines = [
        '# NYPD Shooting Incidents: Trends',
        '',
        f"Source rows: {results['n_raw']:,}. Non-murder victims with a date and borough: {results['n_clean']:,}.",
        '',
    ]
    if len(yearly):
        peak_year = int(yearly.idxmax())
        lines += [
            f"Data covers {yearly.index.min()}-{yearly.index.max()}. "
            f"The busiest year was {peak_year} with {int(yearly.max()):,} victims.",
            '',
        ]
    lines += [
        '## Cumulative victims', '', f"![Cumulative victims]({charts['daily_cumulative']})", '',
        '## Victims per year', '', f"![Victims per year]({charts['yearly_counts']})", '',
        '| Year | Citywide | % change |', '|---|---|---|',
    ]
    for year, count in yearly.items():
        lines.append(f"| {year} | {count:,} | {fmt(pct.get(year))} |")
    lines += ['', f"![Year-over-year change]({charts['yearly_pct_change']})", '', '## Trend models', '']

    for b in [citywide, *results['boroughs'].values()]:
        lines += _trend_section(f"Year vs {b['label'].title()} % change", f"trend_{slug(b['label'])}",
                                b['year_trend'], b['year_trend_error'], charts)
    for f in results['comparisons']:
        key = f"compare_{slug(f['y_boro'])}_vs_{slug(f['x_boro'])}"
        lines += _trend_section(f"{f['y_boro'].title()} vs {f['x_boro'].title()} % change", key,
                                f['model'], f['error'], charts)
    return '\n'.join(lines)


def write_report(results, output_dir):
    """Write CSV tables, charts and report.md into output_dir. Returns the report path."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    yearly, pct, models = summary_tables(results)
    for name, table in [('yearly_counts.csv', yearly), ('yearly_pct_change.csv', pct),
                        ('trend_models.csv', models)]:
        table.to_csv(output_dir / name, index=name != 'trend_models.csv')
        print(f"  Saved: {output_dir / name}")

    charts = render_charts(results, output_dir)
    report_path = output_dir / 'report.md'
    report_path.write_text(render_markdown(results, charts), encoding='utf-8')
    print(f"  Saved: {report_path}")
    return report_path


def main():
    settings = load_settings()
    raw = load_raw(settings)
    results = run_analysis(raw, on_incomplete=settings['on_incomplete'], on_bad_date=settings['on_bad_date'])
    print(f"\n{'='*70}")
    for b in [results['citywide'], *results['boroughs'].values()]:
        summary = format_trend(b['year_trend']) if b['year_trend'] else f"n/a ({b['year_trend_error']})"
        print(f"  {b['label']:<14} {summary}")
    for f in results['comparisons']:
        summary = format_trend(f['model']) if f['model'] else f"n/a ({f['error']})"
        print(f"  {f['y_boro']} vs {f['x_boro']}: {summary}")
    print(f"{'='*70}")
    report_path = write_report(results, settings['output_dir'])
    print(f"\nReport written to {report_path}")


if __name__ == "__main__":
    main()

"""MIT License

Creative Commons CC-BY-SA 4.0 2026 Diego Aguilar-Canabal"""
