"""
Recipe domain types.

Responsibilities:
- Decode TheMealDB meal payloads into immutable Recipe models.
- Define the search filter value object and API response shapes.
- Define the error hierarchy shared by the gateway, planner and aggregator.
- Derive presentational facets (cooking time, mood, video embed).
"""
