"""
Simulation pipelines for the DSC engine.
"""
__all__ = ["pipeline"]

from .simple import pipeline
