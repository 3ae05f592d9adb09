"""Risk warning emission and management."""

from __future__ import annotations

import logging

from netrisk import defaults
from netrisk.errors import NotFoundError, ValidationError, WarningEmissionError
from netrisk.models import (
    RiskFactor,
    RiskLevel,
    RiskWarning,
    Severity,
    WarningSeverity,
    WarningType,
    new_id,
)
from netrisk.observability import inc
from netrisk.ports import NetRiskStore

log = logging.getLogger("netrisk.risk")

_ESCALATION_MESSAGES = {
    RiskLevel.CRITICAL: "Enterprise risk level escalated to critical; immediate attention recommended",
    RiskLevel.HIGH: "Enterprise risk level raised to high; immediate attention recommended",
}


# ---------------------------------------------------------------------------
# Emission during assessment
# ---------------------------------------------------------------------------

def assessment_warnings(
    enterprise_id: str,
    enterprise_name: str,
    level: RiskLevel,
    factors: list[RiskFactor],
) -> list[RiskWarning]:
    """Warnings an assessment should raise, in emission order.

    High or critical level: one ``risk_escalation``.  Any critical factor:
    one ``new_risk`` referencing the first critical factor.
    """
    out: list[RiskWarning] = []
    if level in _ESCALATION_MESSAGES:
        out.append(RiskWarning(
            id=new_id(),
            enterprise_id=enterprise_id,
            enterprise_name=enterprise_name,
            warning_type=WarningType.RISK_ESCALATION,
            severity=(
                WarningSeverity.CRITICAL if level == RiskLevel.CRITICAL
                else WarningSeverity.WARNING
            ),
            message=_ESCALATION_MESSAGES[level],
        ))

    critical = [f for f in factors if f.severity == Severity.CRITICAL]
    if critical:
        out.append(RiskWarning(
            id=new_id(),
            enterprise_id=enterprise_id,
            enterprise_name=enterprise_name,
            warning_type=WarningType.NEW_RISK,
            severity=WarningSeverity.CRITICAL,
            message=f"{len(critical)} critical risk factor(s) found; urgent handling required",
            risk_factor_id=critical[0].id,
        ))
    return out


async def emit_warnings(
    store: NetRiskStore, warnings: list[RiskWarning],
) -> tuple[list[str], list[WarningEmissionError]]:
    """Persist ``warnings`` one at a time.

    Returns the created ids and one error per failed write; a failed write is
    logged and never stops the ones after it.
    """
    created: list[str] = []
    failed: list[WarningEmissionError] = []
    for warning in warnings:
        warning_type = warning.warning_type.value
        try:
            created.append(await store.create_warning(warning))
        except Exception as exc:
            err = WarningEmissionError(warning.enterprise_id, warning_type, exc)
            failed.append(err)
            inc("netrisk_warning_failures_total", type=warning_type)
            log.error(
                "%s", err,
                exc_info=exc,
                extra={"enterprise_id": warning.enterprise_id, "warning_type": warning_type},
            )
        else:
            inc("netrisk_warnings_emitted_total", type=warning_type)
    return created, failed


# ---------------------------------------------------------------------------
# Management
# ---------------------------------------------------------------------------

async def create_warning(
    store: NetRiskStore,
    enterprise_id: str,
    warning_type: WarningType | str,
    severity: WarningSeverity | str,
    message: str,
    risk_factor_id: str | None = None,
) -> RiskWarning:
    if not message.strip():
        raise ValidationError("message must not be empty")
    try:
        warning_type = WarningType(warning_type)
        severity = WarningSeverity(severity)
    except ValueError as exc:
        raise ValidationError(str(exc)) from None

    enterprise = await store.get_entity(enterprise_id)
    if enterprise is None:
        raise NotFoundError("enterprise", enterprise_id)

    warning = RiskWarning(
        id=new_id(),
        enterprise_id=enterprise_id,
        enterprise_name=enterprise.name,
        warning_type=warning_type,
        severity=severity,
        message=message,
        risk_factor_id=risk_factor_id,
    )
    await store.create_warning(warning)
    inc("netrisk_warnings_emitted_total", type=warning_type.value)
    log.info(
        "Created %s warning %s", warning_type.value, warning.id,
        extra={"enterprise_id": enterprise_id},
    )
    return warning


async def list_warnings(
    store: NetRiskStore,
    *,
    is_read: bool | None = None,
    severity: str | None = None,
    enterprise_id: str | None = None,
    limit: int | None = None,
) -> list[RiskWarning]:
    if limit is not None and not 1 <= limit <= defaults.QUERY_LIMIT_MAX_PAGE:
        raise ValidationError(f"limit must be between 1 and {defaults.QUERY_LIMIT_MAX_PAGE}, got {limit}")
    if severity == "all":
        severity = None
    if severity is not None:
        try:
            WarningSeverity(severity)
        except ValueError:
            raise ValidationError(f"unknown severity: {severity}") from None
    return await store.list_warnings(
        is_read=is_read, severity=severity, enterprise_id=enterprise_id, limit=limit,
    )


async def mark_warning_read(store: NetRiskStore, warning_id: str) -> None:
    if not await store.mark_read(warning_id):
        raise NotFoundError("warning", warning_id)


async def resolve_warning(store: NetRiskStore, warning_id: str, resolved_by: str) -> None:
    if not resolved_by:
        raise ValidationError("resolved_by must not be empty")
    if not await store.resolve_warning(warning_id, resolved_by):
        raise NotFoundError("warning", warning_id)
