"""
API package containing the HTTP routes.

Routes are grouped by version under subpackages such as ``v1``; each
version exposes a top‑level ``router`` that includes all of its
domain‑specific endpoints.
"""
