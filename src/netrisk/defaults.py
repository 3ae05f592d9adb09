"""Single source of truth for shared constants and configuration defaults.

Every default that appears in more than one module (service, API, CLI,
config) is defined here.  Constants local to one algorithm live in the
``_constants`` module of its subpackage.
"""

from __future__ import annotations


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------

DEFAULT_DB_BACKEND = "sqlite"
DEFAULT_DB_PATH = ".netrisk/state.db"

# ---------------------------------------------------------------------------
# Query limits
# ---------------------------------------------------------------------------

QUERY_LIMIT_SMALL = 50          # warnings list, entity pickers
QUERY_LIMIT_MEDIUM = 200        # default entity listing page
QUERY_LIMIT_LARGE = 10_000      # whole-graph statistics
QUERY_LIMIT_MAX_PAGE = 500      # largest page a caller may request
FINANCIAL_HISTORY_LIMIT = 3     # latest financial records read per assessment

# ---------------------------------------------------------------------------
# Graph traversal
# ---------------------------------------------------------------------------

DEFAULT_PATH_MAX_DEPTH = 6
DEFAULT_PROPAGATION_MAX_DEPTH = 4
DEFAULT_NEIGHBOURHOOD_DEPTH = 1
MAX_NEIGHBOURHOOD_DEPTH = DEFAULT_PROPAGATION_MAX_DEPTH
DEFAULT_INITIAL_RISK = 1.0

# ---------------------------------------------------------------------------
# Batch execution
# ---------------------------------------------------------------------------

BATCH_CHUNK_SIZE = 5
MAX_BATCH_IDS = 50

# ---------------------------------------------------------------------------
# Assessment
# ---------------------------------------------------------------------------

ASSESSMENT_VALIDITY_DAYS = 7
