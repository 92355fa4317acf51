"""
Agent Valuation.

Task valuation, token pricing and survival status for autonomous agents
that must earn more than they spend.
"""

__version__ = "0.1.0"
