"""Reserve conversion constants."""

DEFAULT_CONVERSION_RATE = 1000  # units minted per unit of deposited value (1 ETH -> 1000 DTK)
