"""Virtual-analog filters, a DC blocker and a modal resonator voice."""

__version__ = "0.1.0"