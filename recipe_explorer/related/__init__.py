"""
Related-recipe aggregation.

Responsibilities:
- Derive category, area and primary-ingredient signals from a focal recipe.
- Fetch candidate pools category -> area -> ingredient, each at most once,
  stopping as soon as enough recipes are collected.
- Merge pools without the focal recipe or duplicate ids.
- Shuffle through an injectable random source and cut to the requested limit.
"""
