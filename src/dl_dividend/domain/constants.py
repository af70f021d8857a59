"""Dividend accounting constants."""

# Scale applied to the per-share rate so that value * MAGNITUDE // supply
# keeps sub-unit precision. Per distribution at most (total_supply - 1)
# magnified units are lost to the floor. A power of ten (same order as
# 2**128) keeps payouts exact for supplies that are decimal multiples of
# the distributed value, which is the common case with 18-decimal amounts.
MAGNITUDE = 10**38
