"""
MediTrack - single-user patient records manager.
"""
__version__ = "3.0.0"
