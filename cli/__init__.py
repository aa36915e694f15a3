"""Subcommand parsers and handlers for the imgprep CLI."""
