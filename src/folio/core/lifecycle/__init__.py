"""Lifecycle hooks."""
from __future__ import annotations

from .dispatcher import HookFailure, LifecycleDispatcher, LifecycleEvent, LifecycleHook, LifecycleTable

__all__ = ["HookFailure", "LifecycleDispatcher", "LifecycleEvent", "LifecycleHook", "LifecycleTable"]
