"""Models, configuration, converters, repositories and handlers for rocket parts inventory, orders and payments."""

__version__ = "0.1.0"