"""
Petora Backend - Application Package Initializer
=================================================

What: Marks the `petora` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by uvicorn and pytest.

Architecture Note:
    The backend follows a layered layout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Domain Logic)     │  ← auth, media, entity orchestration
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← document models + API contracts
    ├─────────────────────────────────────┤
    │        Store (Persistence)          │  ← MongoDB collections
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
