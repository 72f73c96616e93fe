"""Command line commands for sift."""
