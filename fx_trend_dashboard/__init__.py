"""Currency converter and exchange-rate trend dashboard."""

__version__ = "0.1.0"
