"""
Contracts (data models).

This folder defines the shapes exchanged with external collaborators:
- Catalogue document entries (products, categories, amount ranges, filters)
- Click events as persisted in the key-value store
- Abstract interfaces for catalogue sources, key-value stores and analytics hooks

Both mock and real HTTP clients should use these contracts.
"""
