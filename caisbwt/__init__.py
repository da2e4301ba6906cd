"""Burrows-Wheeler transform variants built by conjugate array induced sorting."""

__version__ = "0.1.0"

__all__ = ["boundaries", "cais", "circular", "reader", "transforms", "pipeline", "cli"]