"""Core configuration, logging, exceptions and shared value types."""
