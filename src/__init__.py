"""
Quill backend.

    src/
    ├── api/        ← FastAPI app and routers
    ├── config/     ← Settings
    └── shared/     ← Models, repositories, services, adapters

    uvicorn src.api.main:app --reload     # serve
    alembic upgrade head                  # create or migrate the schema
"""
