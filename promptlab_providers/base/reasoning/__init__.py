"""Reasoning effort mapping."""

from .mapper import map_reasoning_parameters, round_half_up, thinking_budget

__all__ = ["map_reasoning_parameters", "round_half_up", "thinking_budget"]
