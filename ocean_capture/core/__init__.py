"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Named constants (region of interest, output size, endpoints)
- exceptions: Custom exception hierarchy
"""
