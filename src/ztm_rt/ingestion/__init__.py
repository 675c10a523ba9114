"""
Fetch, decode and flatten GTFS Realtime payloads. Each feed is flattened on
its own so a malformed payload only degrades the table it belongs to.
"""
