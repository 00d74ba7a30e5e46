"""
Service layer for the roundsharp engine.
"""

from roundsharp.engine.table import RoundTable, DEFAULT_CONFIG

__all__ = ["RoundTable", "DEFAULT_CONFIG"]
