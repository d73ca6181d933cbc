"""Source-specific data pipelines."""
