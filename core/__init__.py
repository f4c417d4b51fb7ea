"""Core (UI-agnostic) catalog logic.

This package contains:
- header alias resolution and row normalization (sheet rows -> CatalogEntry)
- the gviz response decoder and the remote/local row sources
- the TTL snapshot cache and the cache -> network -> fallback loader
- filter criteria, URL parameter mirroring and the search/sort engine
"""
