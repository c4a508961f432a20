"""
Parking lot catalog.

Responsibilities:
- Load the lot catalog from a JSON file into validated, immutable models.
- Reject catalogs whose rate tiers break ordering or contiguity.
- Serve the loaded lots read-only to the pricing and ranking code.
"""
