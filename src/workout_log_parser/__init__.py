"""Natural-language workout log parser."""

__version__ = "0.1.0"
