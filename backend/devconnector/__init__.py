"""
DevConnector Backend — Application Package
============================================

REST backend for a developer network: accounts, profiles and a post feed
stored in MongoDB.

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← validation rules, ownership
    ├─────────────────────────────────────┤
    │     Models & Schemas (Data shapes)  │  ← stored documents + API contract
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← motor client, collections
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
