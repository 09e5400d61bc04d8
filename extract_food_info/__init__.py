"""Food extraction service: Portuguese meal descriptions to structured food items."""

__version__ = "0.1.0"
