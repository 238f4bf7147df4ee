"""Justitia command line tools."""
