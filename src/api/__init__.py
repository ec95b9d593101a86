"""
HTTP layer.

    api/
    ├── main.py           ← create_application(), app
    ├── routes.py         ← /v1/auth, /v1/posts, health
    ├── dependencies/     ← auth, db session, pagination, services
    ├── handlers/         ← one router per resource
    └── middleware/       ← exception handlers, request context
"""
