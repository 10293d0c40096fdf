"""
DevConnector Backend — Middleware Package
===========================================

What:  Cross-cutting concerns applied to requests.

    request_id.py  Correlation id per request (every request)
    logging.py     Access log line per request (every request)
    auth.py        Token guard, a dependency declared on protected routes

Middleware order (outermost first): RequestID → Logging → GZip → CORS →
route. The auth guard runs inside the route's dependency resolution, so
unprotected routes never look at tokens.
"""
