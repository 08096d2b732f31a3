"""Minimal Qt viewer that consumes :class:`~trackbuddy.core.TelemetryState`.

The window is a thin consumer: a :class:`tick_driver.QtTickDriver` moves
throttled points into the history on the Qt thread and the
:class:`trace_view.TraceView` redraws the trace after each tick.
"""
