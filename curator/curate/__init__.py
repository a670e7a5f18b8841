"""Curation tasks that write derived values back into item metadata."""
