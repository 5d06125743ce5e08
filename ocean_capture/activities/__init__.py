"""Capture pipeline activities.

Each module implements one pipeline stage as a plain function:

- select_mode: choose algorithm, sensor and filters for the run
- authenticate: resolve the bearer credential
- build_request: assemble the immutable ``ImageRequest``
- fetch_imagery: submit the request and normalise the reply to bytes
- persist_imagery: write the bytes to disk
"""
