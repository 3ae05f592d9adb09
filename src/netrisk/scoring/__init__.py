"""Enterprise scoring: four independent 0-100 business scores."""

from netrisk.scoring.engine import ScoringEngine

__all__ = ["ScoringEngine"]
