"""Shared constants for risk assessment."""

# --- Risk factor scoring ---
_SEVERITY_BASE = {"low": 10, "medium": 25, "high": 50, "critical": 80}
_CATEGORY_MULTIPLIER = {
    "financial": 1.2,
    "legal": 1.1,
    "operational": 1.0,
    "market": 0.9,
    "reputation": 0.8,
}
_DEFAULT_CATEGORY_MULTIPLIER = 1.0

# --- Network risk ---
_RELATIONSHIP_WEIGHT = {
    "supplier": 1.2,
    "customer": 1.0,
    "partner": 0.8,
    "investor": 1.5,
    "guarantor": 2.0,
    "subsidiary": 1.8,
    "competitor": 0.5,
}
_DEFAULT_RELATIONSHIP_WEIGHT = 1.0
_INFLUENCED_BY_TYPES = frozenset({"supplier", "guarantor"})
_CRITICAL_PATHS_DIVISOR = 10
_CRITICAL_PATHS_CAP = 20

# --- Financial indicators (percent unless noted) ---
_DEBT_RATIO_THRESHOLD = 70.0
_DEBT_RATIO_CRITICAL = 80.0
_CURRENT_RATIO_THRESHOLD = 1.2   # ratio, not percent
_CURRENT_RATIO_CRITICAL = 1.0
_NET_MARGIN_THRESHOLD = 5.0
_NET_MARGIN_CRITICAL = 0.0

_INDICATOR_POINTS = {"critical": 30, "warning": 15, "normal": 5}
_MISSING_DATA_SCORE = 20

_DEBT_RATIO_NAME = "资产负债率"
_CURRENT_RATIO_NAME = "流动比率"
_NET_MARGIN_NAME = "净利润率"
_MISSING_DATA_NAME = "数据缺失"

# --- Composite ---
_W_FACTORS = 0.4
_W_NETWORK = 0.3
_W_FINANCIAL = 0.3
_SCORE_CAP = 100

_LEVEL_CUTOFFS = (
    (80, "critical"),
    (60, "high"),
    (40, "medium"),
)
