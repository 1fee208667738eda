"""Evaluation harness for intent-to-service classification oracles."""

__version__ = "0.1.0"
