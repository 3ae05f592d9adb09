"""Shared constants for graph analysis."""

# --- Path finder ---
_MIN_EDGE_STRENGTH = 1e-6  # floor for 1/strength traversal weights

# --- Influence weights ---
_W_DEGREE = 0.3
_W_WEIGHTED_DEGREE = 0.2
_W_BETWEENNESS = 0.2
_W_CLOSENESS = 0.15
_W_EIGENVECTOR = 0.15

_BETWEENNESS_PER_NEIGHBOR = 0.1
_EIGENVECTOR_PER_NEIGHBOR_EDGE = 0.1
_RADIUS_BASE = 3.0
_RADIUS_PER_EDGE = 0.1
_RADIUS_FLOOR = 1.0

# --- Risk propagation ---
_PROPAGATION_MULTIPLIERS = {
    "guarantee": 0.9,
    "investment": 0.8,
    "ownership": 0.85,
    "partnership": 0.7,
    "supply": 0.6,
    "employment": 0.4,
    "other": 0.3,
}
_DEFAULT_PROPAGATION_MULTIPLIER = 0.3
_BIDIRECTIONAL_TYPES = frozenset({"partnership", "supply", "investment"})
_DISTANCE_DECAY = 0.7
_MIN_PROPAGATED_RISK = 0.01
