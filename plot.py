# Plotting helpers. One figure per call, no styles set.
# A data section is plotted as x against one or more y1 series on the left
# axis and, optionally, y2 series on a right axis.
import logging

import matplotlib.pyplot as plt
import numpy as np

import query as q

log = logging.getLogger(__name__)

_DPI = 100


def _finish(fig, save):
    if save:
        fig.savefig(save)
        plt.close(fig)
        log.info("Saved plot to %s", save)
    else:
        plt.show()


def _colors():
    return plt.rcParams['axes.prop_cycle'].by_key().get('color', ['C0'])


def _draw(ax, x_series, series, log_scale, first_color=0):
    colors = _colors()
    for k, (label, values) in enumerate(series):
        y = np.asarray(values, dtype=float)
        x = np.arange(len(y)) if x_series is None else np.asarray(x_series[1], dtype=float)
        ax.plot(x, y, marker='.', label=label, color=colors[(first_color + k) % len(colors)])
    if log_scale:
        ax.set_yscale('log')
    ax.set_ylabel(', '.join(label for label, _ in series))


def draw_scan(ax, node, x=0, y1=(-1,), y2=(), y1_log=False, y2_log=False, title=None):
    """Draw a data section onto `ax`; returns the right axis when y2 is used."""
    x_series, s1, s2 = q.select_series(node, x, y1, y2)
    _draw(ax, x_series, s1, y1_log)
    ax.set_xlabel(x_series[0] if x_series is not None else 'index')
    ax2 = None
    if s2:
        ax2 = ax.twinx()
        _draw(ax2, x_series, s2, y2_log, first_color=len(s1))
    if title:
        ax.set_title(title)
    if len(s1) + len(s2) > 1:
        handles, labels = ax.get_legend_handles_labels()
        if ax2 is not None:
            h2, l2 = ax2.get_legend_handles_labels()
            handles += h2
            labels += l2
        ax.legend(handles, labels)
    return ax2


def plot_scan(nodes, idx, occurrence, settings, x=0, y1=(-1,), y2=(),
              y1_log=False, y2_log=False, save=None):
    node = q.get_scan_data(idx, occurrence)
    head = q.scan_for(nodes, node)
    title = f"Scan {head.index}: {head.code}" if head is not None else f"Data #{occurrence}"

    fig, ax = plt.subplots(figsize=(8, settings.plot_height / _DPI), dpi=_DPI)
    draw_scan(ax, node, x, y1, y2, y1_log, y2_log, title=title)
    fig.tight_layout()
    _finish(fig, save)
    return fig


def plot_all(nodes, idx, settings, save=None):
    """
    Plot every data section (first vs last column) stacked in one figure,
    up to settings.maximum_plots. Sections without rows are skipped.
    """
    items = [(k, n) for k, n in enumerate(idx['scan_data']) if n.data]
    if not items:
        raise ValueError("No data to plot.")
    limit = settings.maximum_plots
    if len(items) > limit:
        log.warning("Too many plots: showing %d of %d", limit, len(items))
        items = items[:limit]
    if not items:
        raise ValueError("maximumNumberOfPlots is 0; nothing plotted.")

    height = settings.plot_height / _DPI
    fig, axes = plt.subplots(len(items), 1, figsize=(8, height * len(items)), dpi=_DPI, squeeze=False)
    for ax, (k, node) in zip(axes[:, 0], items):
        head = q.scan_for(nodes, node)
        title = f"Scan {head.index}: {head.code}" if head is not None else f"Data #{k}"
        draw_scan(ax, node, title=title)
    fig.tight_layout()
    _finish(fig, save)
    return fig
