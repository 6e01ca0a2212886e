"""
Multi-criteria recipe search.

Responsibilities:
- Pick exactly one remote lookup for a query plus filters, by fixed priority.
- Post-filter the fetched recipes by case-insensitive substring on text fields.
- Debounce rapid successive searches so only the latest one runs.
"""
