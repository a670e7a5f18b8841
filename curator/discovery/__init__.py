"""Search document assembly and index plugins."""
