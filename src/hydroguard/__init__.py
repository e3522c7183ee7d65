"""HydroGuard flood/drought calculation core."""

__version__ = "0.1.0"
