"""Core functionality for the serverless CLI."""
