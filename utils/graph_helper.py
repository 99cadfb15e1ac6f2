from typing import List, Sequence, Tuple
import pyqtgraph as pg


def setup_progress_plot(plot_widget: pg.PlotWidget, line_color: str):
    plot_widget.setBackground(None)
    plot_widget.showGrid(x=False, y=True, alpha=0.15)
    plot_widget.setMenuEnabled(False)
    plot_widget.setMouseEnabled(x=False, y=False)
    plot_widget.hideButtons()
    plot_widget.setLabel('left', 'Верно')
    plot_widget.setLabel('bottom', 'сек')
    curve = plot_widget.plot([], [], pen=pg.mkPen(line_color, width=2.5), antialias=True)
    return curve


def split_progress(samples: Sequence[Tuple[int, int]]) -> Tuple[List[int], List[int]]:
    xs = [t for t, _ in samples]
    ys = [n for _, n in samples]
    return xs, ys


def update_curve(curve, samples: Sequence[Tuple[int, int]]):
    xs, ys = split_progress(samples)
    curve.setData(xs, ys)
