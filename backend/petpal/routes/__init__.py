# Routes package init
"""
PetPal Backend — Routes Package
=================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - api.py:     /api/pets...          (stateless JSON API, success/failure envelope)
    - auth.py:    /auth/register, /auth/login, /auth/logout  (web, session cookie)
    - pets.py:    /pets...              (web, session-gated, owner-scoped)
    - pages.py:   /, /dashboard         (web landing pages)
    - health.py:  /health               (service health check)

Routes stay thin: they read input, resolve the session user where needed,
call a service, and format the response. Business rules live in services.
"""
