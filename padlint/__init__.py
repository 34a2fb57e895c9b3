"""
PadLint: syntax highlighting and heuristic linting for text editors.
"""

__version__ = "1.0.0"
