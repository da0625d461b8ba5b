"""Generate data from regular expressions and export it as CSV, JSON, XML or TSV."""

__version__ = "0.1.0"