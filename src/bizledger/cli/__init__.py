"""Command line interface for bizledger."""
