"""Reserve invariant (INV-R): reserve == value minted - value redeemed."""
import logging

from src.dl_ledger.domain.state import LedgerState

logger = logging.getLogger(__name__)


def verify_reserve(state: LedgerState) -> list[str]:
    """Compare reserve_balance against the running mint/burn totals."""
    violations: list[str] = []
    minted_value = state.total_minted_value
    redeemed_value = state.total_redeemed_value
    expected = minted_value - redeemed_value
    if state.reserve_balance != expected:
        msg = (
            f"INV-R violated: reserve({state.reserve_balance}) != "
            f"minted({minted_value}) - redeemed({redeemed_value}) = {expected}"
        )
        violations.append(msg)
        logger.error(msg)
    if state.reserve_balance < 0:
        msg = f"INV-R violated: negative reserve {state.reserve_balance}"
        violations.append(msg)
        logger.error(msg)
    return violations
