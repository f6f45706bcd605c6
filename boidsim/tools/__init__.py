"""Command-line tools and the preset library."""
