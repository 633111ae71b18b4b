# Services package init
"""
Precisely Documents: Services Layer
====================================

What:  Business rules between the HTTP layer and the repository.

Service Inventory:
    - validate_document: trims and checks title and signee
    - DocumentService: validation and existence checks around repository calls

Services receive their repository at construction and hold no other state.
"""
