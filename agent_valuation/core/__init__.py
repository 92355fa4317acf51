"""
Core modules for Agent Valuation.

This package contains the occupation catalog, task classification,
pricing resolution and survival status evaluation.
"""
