"""
Recipe lookup gateway.

Responsibilities:
- Manage TheMealDB base URL, timeout and cache settings.
- Issue exact-match lookups (name, category, area, ingredient, id) and random samples.
- Decode provider JSON into Recipe models.
- Collapse transport and parse failures into a single GatewayError.
"""
