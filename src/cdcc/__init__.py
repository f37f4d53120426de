"""cdcc — Circuit Diagram component compiler."""

__version__ = "0.3.0"
