"""Shared constants for enterprise scoring.

Tier tables are ``(minimum, bonus)`` pairs checked top-down; the first
minimum the value reaches wins.
"""

_SCORE_MIN = 0.0
_SCORE_MAX = 100.0

# --- SVS weights ---
_SVS_W_FINANCIAL = 0.30
_SVS_W_SCALE = 0.25
_SVS_W_RISK = 0.25
_SVS_W_CONNECTIVITY = 0.20

# --- DES weights ---
_DES_W_CLIENTS = 0.35
_DES_W_INTERACTION = 0.30
_DES_W_COOPERATION = 0.20
_DES_W_MARKET = 0.15

# --- NIS weights ---
_NIS_W_SUPPLY = 0.30
_NIS_W_INVESTMENT = 0.25
_NIS_W_GUARANTEE = 0.25
_NIS_W_INDUSTRY = 0.20

# --- PCS weights ---
_PCS_W_CONVERSION = 0.40
_PCS_W_COMMUNICATION = 0.30
_PCS_W_DEMAND = 0.20
_PCS_W_DECISION = 0.10

# --- Financial health ---
_FIN_BASE = 50
_ROE_HIGH = 0.15      # strictly above
_ROE_HIGH_BONUS = 20
_ROE_MID = 0.08
_ROE_MID_BONUS = 10
_ROE_NEGATIVE_PENALTY = -20
_DEBT_LOW_TIERS = ((0.4, 15), (0.6, 5))  # debt ratio strictly below
_DEBT_HIGH = 0.8
_DEBT_HIGH_PENALTY = -15
_PROFIT_BONUS = 15
_LOSS_PENALTY = -20
_FIN_CAPITAL_TIERS = ((1e8, 10), (1e7, 5))

# --- Company scale ---
_SCALE_BASE = 40
_SCALE_CAPITAL_TIERS = ((5e8, 30), (1e8, 25), (5e7, 20), (1e7, 15), (1e6, 10))
_SCALE_YEARS_TIERS = ((10, 15), (5, 10), (2, 5))
_SCALE_CONNECTION_TIERS = ((100, 15), (50, 10), (20, 5))

# --- Risk level score ---
_RISK_LEVEL_SCORE = {"low": 90, "medium": 60, "high": 30}
_RISK_LEVEL_DEFAULT = 50

# --- Network connectivity ---
_CONNECTIVITY_BASE = 20
_SUPPLIER_TIERS = ((50, 25), (20, 15), (5, 10))
_CUSTOMER_TIERS = ((100, 25), (50, 15), (10, 10))
_PARTNER_TIERS = ((20, 30), (10, 20), (5, 10))

# --- Client quality ---
_CLIENT_BASE = 20
_CLIENT_COUNT_TIERS = ((50, 30), (20, 20), (5, 10))
_CLIENT_ACTIVE_TIERS = ((0.8, 25), (0.6, 15), (0.4, 10))
_CLIENT_VALUE_TIERS = ((1e6, 25), (5e5, 15), (1e5, 10))

# --- Interaction frequency ---
_INTERACTION_BASE = 20
_TASK_TIERS = ((20, 40), (10, 30), (5, 20), (1, 10))
_EVENT_TIERS = ((10, 40), (5, 30), (3, 20), (1, 10))

# --- Cooperation depth ---
_DEFAULT_AVG_STRENGTH = 0.5
_COOPERATION_STRENGTH_FACTOR = 80
_COOPERATION_COUNT_TIERS = ((20, 20), (10, 10))

# --- Market activity ---
_MARKET_BASE = 30
_NEWS_TIERS = ((20, 35), (10, 25), (5, 15))
_DEFAULT_SENTIMENT = 0.5
_SENTIMENT_FACTOR = 35

# --- Network influence ---
_SUPPLY_CHAIN_TYPES = frozenset({"supply", "partnership"})
_SUPPLY_BASE = 20
_SUPPLY_PER_EDGE = 2
_INVESTMENT_BASE = 10
_INVESTMENT_PER_EDGE = 15
_INVESTMENT_STRENGTH_FACTOR = 50
_GUARANTEE_BASE = 15
_GUARANTEE_PER_EDGE = 5
_INDUSTRY_BASE = 30
_INDUSTRY_PER_TARGET = 3

# --- Prospect conversion ---
_NO_PROSPECTS_SCORE = 40
_CONVERSION_BASE = 20
_CONVERSION_FACTOR = 80
_NO_TASKS_SCORE = 50
_COMMUNICATION_BASE = 30
_COMMUNICATION_FACTOR = 70
_DEMAND_BASE = 40
_SCOPE_LENGTH_TIERS = ((201, 30), (101, 20), (51, 10))  # length strictly above 200/100/50
_INDUSTRY_PRESENT_BONUS = 30
_DECISION_BASE = 30
_DECISION_CAPITAL_TIERS = ((1e8, 40), (1e7, 30), (1e6, 20))
_DECISION_YEARS_TIERS = ((10, 30), (5, 20), (2, 10))
