"""Command line interface for FixtureKit."""
