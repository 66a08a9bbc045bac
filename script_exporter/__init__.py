"""Script exporter — runs configured check scripts and exposes their results."""

__version__ = "0.1.0"
