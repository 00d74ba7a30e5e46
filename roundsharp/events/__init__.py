"""
Event system for the round engine.
"""

from roundsharp.events.emitter import (
    EventEmitter,
    EventBus,
    EventPriority,
    RoundEventType,
)

__all__ = ["EventEmitter", "EventBus", "EventPriority", "RoundEventType"]
