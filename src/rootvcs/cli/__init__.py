"""Command-line interface for RootVCS."""
