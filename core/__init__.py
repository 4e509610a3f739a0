"""The commit context pipeline."""
