"""Dividend conservation checks (audit only, never on an operation path).

INV-D1: accumulated(a) >= withdrawn(a) for every account
INV-D2: sum(accumulated) <= total_distributed
INV-D3: total_distributed - sum(accumulated) <= distribution_count + len(accounts)
        (each distribution floors the rate once, each account floors once)

The caller supplies the account list; the ledger address accrues nothing
and need not be listed. Returns a list of violation strings.
"""
import logging
from collections.abc import Iterable

from src.dl_dividend.domain.accounting import DividendAccounting
from src.dl_ledger.domain.state import LedgerState

logger = logging.getLogger(__name__)


def verify_conservation(
    dividends: DividendAccounting,
    state: LedgerState,
    accounts: Iterable[str],
) -> list[str]:
    violations: list[str] = []
    seen = list(dict.fromkeys(accounts))
    total_accumulated = 0
    for account in seen:
        accumulated = dividends.accumulative_dividend_of(account)
        withdrawn = dividends.withdrawn_dividend_of(account)
        if accumulated < withdrawn:
            violations.append(
                f"INV-D1 violated: {account} accumulated({accumulated}) < withdrawn({withdrawn})"
            )
        total_accumulated += accumulated

    distributed = state.total_dividends_distributed
    if total_accumulated > distributed:
        violations.append(
            f"INV-D2 violated: sum_accumulated({total_accumulated}) > distributed({distributed})"
        )
    slack = distributed - total_accumulated
    bound = state.distribution_count + len(seen)
    if slack > bound:
        violations.append(
            f"INV-D3 violated: rounding slack {slack} exceeds bound {bound}"
        )

    for msg in violations:
        logger.error(msg)
    return violations
