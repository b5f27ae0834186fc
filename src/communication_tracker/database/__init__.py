"""
# Database Package

The persistence layer of the Communication Tracker, built on **Motor** (async MongoDB driver).

## Usage

```python
from communication_tracker.database import db_manager

# In the FastAPI lifespan (run as a background task)
await db_manager.connect()

companies = db_manager.get_collection("companies")
company = await companies.find_one({"name": "Acme"})

# On shutdown
await db_manager.disconnect()
```

Attributes:
    db_manager (DatabaseManager): The global singleton instance for database access.
    DatabaseManager (class): The manager class (exported for type hinting and tests).
"""

from communication_tracker.database.manager import (
    COMMUNICATIONS_COLLECTION,
    COMPANIES_COLLECTION,
    NEXT_COMMUNICATIONS_COLLECTION,
    DatabaseManager,
    db_manager,
)

__all__ = [
    "COMMUNICATIONS_COLLECTION",
    "COMPANIES_COLLECTION",
    "NEXT_COMMUNICATIONS_COLLECTION",
    "DatabaseManager",
    "db_manager",
]
