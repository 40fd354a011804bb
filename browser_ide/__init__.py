"""Browser IDE - a minimal code editor and deployment dashboard for Subhosting."""

__version__ = "0.1.0"
