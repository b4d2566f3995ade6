"""Shared models and exceptions used across layers."""
