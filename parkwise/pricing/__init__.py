"""
Parking pricing core.

Responsibilities:
- Decide which lot discounts apply to a stay (spend, qualifiers, membership).
- Bill paid minutes against a lot's ordered rate tiers.
- Assemble a deterministic per-lot cost breakdown.
"""
