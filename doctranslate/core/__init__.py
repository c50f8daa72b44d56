"""
Core translation modules: protection, chunking, translation, restoration.
"""
