"""
Utility modules: logging and file handling.
"""
