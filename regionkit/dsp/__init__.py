"""Fade curves and fade envelopes."""
