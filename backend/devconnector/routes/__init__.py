"""
DevConnector Backend — API Routes Package
===========================================

What:  HTTP route handlers, one module per resource.

Route Inventory:
    - auth.py:     /api/auth     (login, current user)
    - users.py:    /api/users    (registration)
    - profile.py:  /api/profile  (profiles, experience, education, GitHub)
    - posts.py:    /api/posts    (posts, likes, comments)
    - health.py:   /health

Handlers stay thin: they declare the body schema and the auth guard, call
one service method and return its response model. Failures are raised as
`DevConnectorError` subclasses and rendered by the global handlers.
"""
