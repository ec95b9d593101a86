"""
Shared Module

Everything below the HTTP layer.

    shared/
    ├── adapters/       Google userinfo client, cover image storage
    ├── core/           structlog setup, QuillException hierarchy
    ├── db/             engine, sessions, get_db()
    ├── migrations/     Alembic environment and revisions
    ├── models/         User, Post
    ├── repositories/   queries; flush, never commit
    ├── schemas/        request bodies and response envelopes
    ├── services/       AuthService, PostService
    └── utils/          passwords, JWTs, slugs
"""
