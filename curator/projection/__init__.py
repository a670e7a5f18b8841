"""Bitstream projection.

Walks item -> bundles -> bitstreams and turns each bitstream into flat field
records, consumed by the dc.format curation task and the file info index plugin.
"""
