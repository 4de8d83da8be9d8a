"""
Event system for the sharpjack engine.

This package provides the observer contract between the engine and any
presentation layer.
"""

from sharpjack.events.emitter import (
    EventEmitter,
    EventPriority,
    EngineEventType,
)

__all__ = ["EventEmitter", "EventPriority", "EngineEventType"]
