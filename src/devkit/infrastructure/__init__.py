"""
Shared Infrastructure Layer
"""
