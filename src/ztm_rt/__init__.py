"""
Snapshot the ZTM Poznań GTFS Realtime feeds and vehicle dictionary into flat
polars tables.
"""
