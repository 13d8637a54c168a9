"""Core Layer: error hierarchy, record mapping and store contracts.

Invariants:
    - core never imports from api/ or infrastructure/
"""
