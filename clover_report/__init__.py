"""Console report of uncovered lines from a Clover coverage XML file."""

__version__ = "0.1.0"
