"""
# Communication Tracker

A **FastAPI-based relationship-management backend** for keeping track of the companies you deal with,
the conversations you have had with them, and the conversations you still plan to have.

## Architecture Overview

```
┌──────────────┐     ┌──────────────┐     ┌──────────────────┐     ┌──────────┐
│   FastAPI    │────▶│   Routers    │────▶│     Managers     │────▶│ MongoDB  │
│  (main.py)   │     │  (/api/...)  │     │ (business logic) │     │ (Motor)  │
└──────────────┘     └──────────────┘     └──────────────────┘     └──────────┘
```

## Package Structure

- **`main`**: Application entry point, lifespan management and router wiring
- **`config`**: Pydantic-based configuration with `.env` support
- **`errors`**: Error taxonomy (`NotFoundError`, `ValidationError`, `StoreError`) and JSON error bodies
- **`database`**: `DatabaseManager` singleton owning the Motor client
- **`models`**: Pydantic request models and validators for the three collections
- **`managers`**: Company, communication and next-communication logic, plus logging
- **`routes`**: One router per REST resource, plus health checks
- **`utils`**: Request logging middleware and BSON serialization helpers

## Collections

| Collection | Document |
|---|---|
| `companies` | Company profile, `lastCommunications` id list, cached `nextCommunication` |
| `communications` | Past contact events, each pointing at a company |
| `next_communications` | Planned contact events with an `isCompleted` flag |
"""

__version__ = "1.0.0"
