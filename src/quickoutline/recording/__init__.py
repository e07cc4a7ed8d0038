"""Recording utilities for presentation events."""

from __future__ import annotations

from quickoutline.recording.recorder import EventRecorder, iter_events

__all__ = ["EventRecorder", "iter_events"]
