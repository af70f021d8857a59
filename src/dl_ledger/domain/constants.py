"""Fixed addresses used by the ledger."""

# The ledger's own holding account. Staked units are transferred here while
# locked; their dividend eligibility stays with the staker. No caller may act
# as this address.
LEDGER_ADDRESS = "ledger"
