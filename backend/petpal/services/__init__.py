# Services package init
"""
PetPal Backend — Services Layer
=================================

What:  Business logic between routes (HTTP) and models (persistence).

Service Inventory:
    - care.py:         Care-Action Engine (pure stat transitions)
    - pet_filters.py:  Typed listing filters (equality, set-membership, range)
    - pet_service.py:  Pet CRUD, shared validation/defaulting, care and image updates
    - user_service.py: Registration, username lookup, password verification

Services receive the database session and, for web calls, the acting user id
as explicit arguments. They never touch request or session state.
"""
