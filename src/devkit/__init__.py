"""
devkit: shared kernel for Result-based domain models.
"""

__version__ = "1.0.0"
