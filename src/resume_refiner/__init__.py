"""Resilient LLM completion + tagged-section resume document assembly."""

__version__ = "0.1.0"
