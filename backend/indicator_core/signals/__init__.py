"""Signal detection."""

from indicator_core.signals.detector import SignalDetector, detect_signals

__all__ = ["SignalDetector", "detect_signals"]
