"""PageSpeed Analyzer — run a Lighthouse analysis and export the results."""

__version__ = "0.1.0"
