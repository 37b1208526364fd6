"""
Holdem Agents - Automated Players

Base agent interface, baseline agents and a runner that plays a hand
to completion.
"""

from holdem.agents.base import BaseAgent
from holdem.agents.random_agent import RandomAgent, CallAgent
from holdem.agents.runner import play_hand

__all__ = ["BaseAgent", "RandomAgent", "CallAgent", "play_hand"]
