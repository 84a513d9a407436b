"""Console commands for semrel-py."""
