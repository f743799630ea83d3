# Routes package init
"""
UserCRUD - Routes Package
==========================

What:  HTTP route handlers, one module per group of pages.

Route Inventory:
    - pages.py:    GET  /                       (landing page)
                   GET  /create-a-db-record     (create form)
    - records.py:  GET  /read-a-db-record       (list records)
                   POST /create-a-db-record     (insert)
                   GET  /update-a-db-record     (edit forms)
                   POST /update-a-db-record     (update by id)
                   GET  /delete-a-db-record     (delete form)
                   POST /delete-a-db-record     (delete by name)
    - health.py:   GET  /health                 (database ping)
    - forms.py:    body decoding shared by the POST handlers

Routes stay thin: decode the body, call the record store or the renderer,
return HTML or a redirect. Status codes for failures come from the exception
handlers in main.py.
"""
