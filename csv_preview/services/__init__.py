"""Profiling, validation and preview orchestration services."""
