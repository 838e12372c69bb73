"""
Service layer package.

Each service module encapsulates one domain of business logic.
Services are the only layer that talks to the inventory API; routes
never call ``api_client`` directly.

Import services in route modules as needed::

    from inventory.services import equipment_service
"""
