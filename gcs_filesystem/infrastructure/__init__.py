"""
Infrastructure layer: storage adapters and their exceptions.
"""
