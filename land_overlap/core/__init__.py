"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Named constants (region keys, known region codes, units)
- exceptions: Custom exception hierarchy
"""
