"""Infrastructure Layer: database engine, country store and logging setup.

Invariants:
    - Every SQLAlchemy failure leaves this layer as StorageUnavailableError
"""
