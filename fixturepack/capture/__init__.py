"""Capture subsystem for FixtureKit."""

from fixturepack.capture.session import CaptureSession

__all__ = ["CaptureSession"]
