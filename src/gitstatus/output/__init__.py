"""Status reporters."""
