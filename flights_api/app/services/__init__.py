"""
Service layer abstraction.

Each service encapsulates business logic for a domain and works
against a store handed to it at construction time, so API handlers
never touch the stored records directly.
"""
