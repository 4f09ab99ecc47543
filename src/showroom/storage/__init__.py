"""Flat-file storage layer for showroom.

Submodules are imported directly (``showroom.storage.mappers``,
``showroom.storage.flatfile``) to avoid circular imports with the domain
layer, which depends on them.
"""
