"""Route Modules: one file per resource.

Invariants:
    - Each module defines its own APIRouter with tags
    - Routes talk to storage only through the CountryStore dependency
"""
