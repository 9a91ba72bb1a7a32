"""
Quality checks for fade curves and waveform draw windows.
"""
from regionkit.qc.qc import analyze_curve, analyze_windows
from regionkit.qc.thresholds import QC_THRESHOLDS

__all__ = ["analyze_curve", "analyze_windows", "QC_THRESHOLDS"]
