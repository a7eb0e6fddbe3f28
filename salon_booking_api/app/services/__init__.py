"""
Service layer abstraction.

Each service encapsulates the business logic for one domain and works
against the ``MongoGateway`` passed in by the endpoint, so handlers stay
thin and the services can be exercised directly in tests.

Service methods are plain functions: pymongo and password hashing
block, so the endpoints calling them are plain ``def`` routes that
FastAPI runs in its threadpool.
"""
