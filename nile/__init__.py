"""Nile: hra o stavani rieky z dlazdic."""

__version__ = "0.1.0"
