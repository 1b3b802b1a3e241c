"""Command line interface for cfdeploy."""
