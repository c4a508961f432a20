"""
Parking recommendation engine.

Responsibilities:
- Accept a stay (duration, spend, qualifiers) and an optional origin.
- Price every lot in the catalog for that stay.
- Rank lots by total cost, or by distance from the origin for map display.
- Return structured recommendations ready for API serialisation.
"""
