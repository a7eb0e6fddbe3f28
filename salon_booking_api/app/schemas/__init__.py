"""
Pydantic schema definitions for API payloads.

Each domain (bookings, services, customers, admins, loyalty) defines
its own request and response models.  Response models read MongoDB
documents directly: attributes are snake_case in Python and use the
stored camelCase names (``_id``, ``createdAt``...) as aliases, which is
also what goes out on the wire.
"""
