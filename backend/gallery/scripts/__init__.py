"""Operational scripts, run with `python -m gallery.scripts.<name>`."""
