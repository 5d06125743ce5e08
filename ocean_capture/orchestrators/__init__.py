"""Capture orchestration.

- capture_pipeline: linear authenticate → request → fetch → persist run
"""
