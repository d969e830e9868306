"""
Mock Infrastructure for Resurfacer Tests
========================================
In-memory stand-ins for the host view and the wall clock.

Usage:
    from tests.mocks import FakeClock, FakeSlotSource, FakeRenderer
"""

from .fake_feed import FakeClock, FakeRenderer, FakeSlotSource, RecordingObserver

__all__ = ["FakeClock", "FakeRenderer", "FakeSlotSource", "RecordingObserver"]
