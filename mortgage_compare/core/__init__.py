"""Orchestration logic: statistics, request assembly, readiness gating and chart caching."""
