"""End-to-end test harness for the ParaBank demo banking application."""

__version__ = "1.0.0"
