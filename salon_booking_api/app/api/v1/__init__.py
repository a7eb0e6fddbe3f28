"""
Version 1 of the API.

Served under ``/api`` with the paths the salon web client already
calls (``/api/admin/...``, ``/api/auth/...``, ``/api/services``,
``/api/bookings``).
"""
