"""Dining philosophers simulation with threads, forks and a starvation watchdog."""

__version__ = "0.1.0"