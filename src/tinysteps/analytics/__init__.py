"""
Analytics Module

Append-only domain event log.
"""

from .sink import AnalyticsSink

__all__ = ["AnalyticsSink"]
