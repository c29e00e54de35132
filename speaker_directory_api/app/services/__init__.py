"""
Service layer abstraction.

Each service encapsulates business logic for a domain.  Services load
the whole directory document from the store, change it in memory and
save it back; API handlers never touch the store directly.
"""
