# Services package init
"""
UserCRUD - Services Layer
==========================

What:  The two collaborators route handlers depend on.

Service Inventory:
    - RecordStore (protocol) / MongoRecordStore: the `users` collection
    - ViewRenderer: Jinja2 templates to HTML strings

Both are handed to routes as FastAPI dependencies, so tests can swap in
an in-memory store or a renderer over another template directory.
"""
