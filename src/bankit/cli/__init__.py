"""Command line interface for bankit."""
