"""AccessGate - authorization decision engine for the enterprise portal."""

__version__ = "0.1.0"
