"""
Service layer.

``user_store`` holds the in-memory collection; ``user_service``
encapsulates validation and the single/bulk CRUD semantics on top of
it.  Handlers talk only to ``UserService`` so the store can be swapped
without touching the API layer.
"""
