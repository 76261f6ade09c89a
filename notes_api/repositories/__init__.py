# Repositories package init
"""
Notes API — Data Access Layer
==============================

What:  Adapters over the document store.
How:   Repositories accept opaque filter/update mappings and model objects,
       run them against MongoDB, and translate driver failures into
       application exceptions.

Repository Inventory:
    - NoteRepository: note CRUD over the configured collection
"""
