"""Cross-cutting infrastructure: logging and observability."""
