"""
Holdem Agents - automated seats

This module provides the base agent interface and the rule-based opponent.
"""

from holdem.agents.base import BaseAgent
from holdem.agents.rule_based import RuleBasedAgent

__all__ = ["BaseAgent", "RuleBasedAgent"]
