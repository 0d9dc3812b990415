"""Top-level folio commands."""
