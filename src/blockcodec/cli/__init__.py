"""Command line interface for blockcodec."""
