"""Line charts and regression charts for the shooting report.

One line color per series: citywide first, then the five boroughs in BOROUGHS order.
Style: Excel-like, white background, light grid
"""

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

from .trend import predict

# Citywide, Bronx, Brooklyn, Manhattan, Queens, Staten Island
LINE_COLORS = ['#000000', '#4472C4', '#ED7D31', '#7030A0', '#70AD47', '#C00000']
LINE_MARKERS = ['o', 's', '^', 'D', 'v', 'P']

# Regression charts
FIT_COLOR = '#4472C4'
OBSERVED_COLOR = '#ED7D31'
PREDICTED_COLOR = '#7030A0'
IDENTITY_COLOR = '#808080'

CHART_STYLE = {
    'font.family': 'sans-serif',
    'font.size': 10,
    'axes.titlesize': 12,
    'axes.titleweight': 'bold',
    'axes.grid': True,
    'axes.axisbelow': True,
    'axes.spines.top': False,
    'axes.spines.right': False,
    'grid.alpha': 0.3,
    'legend.fontsize': 9,
    'figure.facecolor': 'white',
    'axes.facecolor': 'white',
}


def use_chart_style():
    """Apply CHART_STYLE to matplotlib's rcParams."""
    plt.rcParams.update(CHART_STYLE)


def save_chart(fig, output_path):
    """Save chart with consistent settings and close it."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150, bbox_inches='tight', facecolor='white', edgecolor='none')
    plt.close(fig)
    print(f"  Saved: {output_path}")
    return output_path


def plot_series(series_by_label, title, ylabel, output_path, xlabel='Year'):
    """Line chart with one line per labelled Period series (x = period).

    Missing values (e.g. undefined percent change) leave a gap instead of being drawn as zero.
    Markers are only drawn for short (yearly) series.
    """
    use_chart_style()
    fig, ax = plt.subplots(figsize=(8, 5))
    for i, (label, series) in enumerate(series_by_label.items()):
        values = series.astype('Float64').to_numpy(dtype=np.float64, na_value=np.nan)
        marker = LINE_MARKERS[i % len(LINE_MARKERS)] if len(series) <= 50 else None
        ax.plot(series.index, values, marker=marker, color=LINE_COLORS[i % len(LINE_COLORS)],
                linewidth=2 if marker else 1.2, markersize=6, label=label)
    ax.set_title(title)
    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)
    if len(series_by_label) > 1:
        ax.legend(loc='best')
    if xlabel == 'Date':
        fig.autofmt_xdate()
    return save_chart(fig, output_path)


def _r2_label(model):
    r2_val = model['r_squared']
    r2_str = f'{r2_val:.2e}' if abs(r2_val) < 0.001 else f'{r2_val:.3f}'
    return f'R² = {r2_str}'


def plot_trend(model, title, output_path):
    """Scatter of observed (x, y) with the OLS line and R² in the legend."""
    use_chart_style()
    fig, ax = plt.subplots(figsize=(8, 5))

    x_range = np.linspace(model['x'].min(), model['x'].max(), 100)
    line_handle, = ax.plot(x_range, predict(model, x_range),
                           color=FIT_COLOR, linewidth=2,
                           label=f"OLS: y = {model['intercept']:.2f} + {model['slope']:.2f}x")
    scatter_handle = ax.scatter(model['x'], model['y'], color=OBSERVED_COLOR, s=40, zorder=3,
                                edgecolors='none', label=f"Observed (n = {model['n_obs']})")
    # R² as separate legend entry (invisible plot for label only)
    r2_handle, = ax.plot([], [], ' ', label=_r2_label(model))

    ax.axhline(0, color='black', linewidth=0.6)
    ax.set_title(title)
    ax.set_xlabel(model['x_label'])
    ax.set_ylabel(model['y_label'])
    ax.legend(handles=[line_handle, scatter_handle, r2_handle], loc='best', frameon=False)
    fig.tight_layout()
    return save_chart(fig, output_path)


def plot_predicted_vs_actual(model, title, output_path):
    """Predicted vs actual y with the identity line."""
    use_chart_style()
    fig, ax = plt.subplots(figsize=(6, 6))
    lo = float(min(model['y'].min(), model['predicted'].min()))
    hi = float(max(model['y'].max(), model['predicted'].max()))
    pad = (hi - lo) * 0.05 or 1.0
    ax.plot([lo - pad, hi + pad], [lo - pad, hi + pad], color=IDENTITY_COLOR, linestyle='--',
            linewidth=1, label='Predicted = Actual')
    ax.scatter(model['y'], model['predicted'], color=PREDICTED_COLOR, s=40, zorder=3,
               edgecolors='none', label=_r2_label(model))
    ax.set_xlim(lo - pad, hi + pad)
    ax.set_ylim(lo - pad, hi + pad)
    ax.set_title(title)
    ax.set_xlabel(f"Actual {model['y_label']}")
    ax.set_ylabel(f"Predicted {model['y_label']}")
    ax.legend(loc='upper left', frameon=False)
    fig.tight_layout()
    return save_chart(fig, output_path)

"""MIT License

Creative Commons CC-BY-SA 4.0 2026 Diego Aguilar-Canabal"""
