"""Root query and mutation classes, one pair per feature."""
