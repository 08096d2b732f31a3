"""Motion telemetry pipeline: G-force extrema and a smoothed trace path."""

__version__ = "0.1.0"
