"""
Core utilities for the metrics engine.

Modules:
    cleaning  — Lenient numeric / text / timestamp coercion
    frames    — Normalized records -> typed DataFrames
    filters   — Order and product predicates
    windows   — Rolling windows and calendar buckets
    ranking   — Group-and-rank primitive, stock urgency tiers
"""
