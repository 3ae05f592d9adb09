"""Exception types raised by netrisk operations."""

from __future__ import annotations


class NetRiskError(Exception):
    """Base class for all netrisk errors."""


class NotFoundError(NetRiskError):
    """A referenced enterprise, node, warning or factor does not exist."""

    def __init__(self, kind: str, ident: str) -> None:
        super().__init__(f"{kind} not found: {ident}")
        self.kind = kind
        self.ident = ident


class ValidationError(NetRiskError):
    """Caller input was rejected before any work started."""


class WarningEmissionError(NetRiskError):
    """Persisting a generated risk warning failed."""

    def __init__(self, enterprise_id: str, warning_type: str, cause: BaseException) -> None:
        super().__init__(f"failed to emit {warning_type} warning for {enterprise_id}: {cause}")
        self.enterprise_id = enterprise_id
        self.warning_type = warning_type
        self.cause = cause


class PartialBatchFailure(NetRiskError):
    """One item of a batch run failed; the rest of the batch is unaffected."""

    def __init__(self, item_id: str, cause: BaseException) -> None:
        super().__init__(f"batch item {item_id} failed: {cause}")
        self.item_id = item_id
        self.cause = cause
