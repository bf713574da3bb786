"""
Models Package

Exports all models for easy importing.
"""

from aqviz.models.air_quality import AirQuality

__all__ = ['AirQuality']
