"""Command-line interface for WFPutils."""
