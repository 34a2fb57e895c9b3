"""
PyQt6 user interface integration.
"""
