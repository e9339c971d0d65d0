"""
Core module: configuration, constants and logging setup.
"""
