"""PyQtGraph view of the G-force trace, live dot and extrema readouts."""

from __future__ import annotations

import numpy as np
import pyqtgraph as pg
from PySide6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from ..core import TelemetryState

_TRACE_COLOR = (255, 165, 0)


class TraceView(QWidget):
    """Square plot of lateral vs. longitudinal G with max-G labels around it."""

    def __init__(self, state: TelemetryState, *, outer_edge_g: float = 3.0, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._state = state
        self._outer_edge_g = float(outer_edge_g)

        self._plot = pg.PlotWidget(self)
        self._plot.setAspectLocked(True)
        self._plot.setXRange(-self._outer_edge_g, self._outer_edge_g, padding=0.0)
        self._plot.setYRange(-self._outer_edge_g, self._outer_edge_g, padding=0.0)
        self._plot.showGrid(x=True, y=True, alpha=0.3)
        self._plot.setLabel("bottom", "lateral", units="G")
        self._plot.setLabel("left", "longitudinal", units="G")
        self._trace = self._plot.plot([], [], pen=pg.mkPen(_TRACE_COLOR, width=1))
        self._dot = pg.ScatterPlotItem(size=12, brush=pg.mkBrush(*_TRACE_COLOR), pen=None)
        self._plot.addItem(self._dot)

        self._labels = {key: QLabel(self) for key in ("accel", "braking", "left", "right")}
        reset_btn = QPushButton("Reset max", self)
        reset_btn.clicked.connect(self._on_reset_clicked)

        readouts = QHBoxLayout()
        for label in self._labels.values():
            readouts.addWidget(label)
        readouts.addStretch(1)
        readouts.addWidget(reset_btn)

        layout = QVBoxLayout(self)
        layout.addWidget(self._plot, 1)
        layout.addLayout(readouts)
        self.refresh()

    def refresh(self) -> None:
        """Redraw from the latest state snapshot; called after each tick."""
        # The plot works in G units, so the trace is requested unscaled.
        trace = self._state.trace_array(scale=1.0)
        if trace.size:
            self._trace.setData(trace[:, 0], trace[:, 1])
        else:
            self._trace.setData([], [])
        point = self._state.current_point
        self._dot.setData(np.array([point.x]), np.array([point.y]))

        ext = self._state.extrema
        self._labels["accel"].setText(f"Max Accel {abs(ext.max_acceleration):.2f} G")
        self._labels["braking"].setText(f"Max Braking {abs(ext.max_braking):.2f} G")
        self._labels["left"].setText(f"Max Left {abs(ext.max_left):.2f} G")
        self._labels["right"].setText(f"Max Right {abs(ext.max_right):.2f} G")

    def _on_reset_clicked(self) -> None:
        self._state.reset_extrema()
        self.refresh()
