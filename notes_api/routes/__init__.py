# Routes package init
"""
Notes API — API Routes Package
===============================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - health.py:  GET    /health        (store liveness, no auth)
    - notes.py:   GET    /notes         (list notes)
                  GET    /note/{id}     (single note)
                  POST   /note          (create)
                  PUT    /note/{id}     (edit)
                  DELETE /note/{id}     (delete)
                  POST   /save/{id}     (send to content service)
    - deps.py:    per-request NoteService, bearer-token pipeline, body decoding

Routes stay thin: they extract path/body data, call NoteService and return
the value. Status mapping for errors lives in main.py.
"""
