"""Data model, persistence and lifecycle for jsleak findings."""
