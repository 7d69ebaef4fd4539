"""Per-family credential validators."""
