# Routes package init
"""
Petora Backend - API Routes Package
====================================

What:  HTTP route handlers that accept requests and return responses.
How:   One module per resource. Handlers pull their service from
       `app.state.services` through the dependencies in petora.dependencies.

Route Inventory:
    - auth.py:          POST /api/auth/register
                        POST /api/auth/login
                        GET  /api/auth/me            (admin only)
    - shelters.py:      POST /api/shelters
                        GET  /api/shelters
    - pets.py:          GET  /api/pets               (species / size / status filters)
                        GET  /api/pets/{id}
                        POST /api/pets               (multipart, `image` field)
                        PUT  /api/pets/{id}
                        DELETE /api/pets/{id}
    - applications.py:  POST /api/applications
                        GET  /api/applications
    - health.py:        GET  /health

Routes stay thin: extract input, call the service, pick the status code.
Errors are raised as PetoraError subclasses and rendered by the global
handlers registered in main.py.
"""
