"""Staking constants."""

ONE_DAY = 86400                  # seconds; rewards accrue per whole day
DEFAULT_STAKING_RATE_BPS = 1     # 0.01% of the staked units per day, paid in value
