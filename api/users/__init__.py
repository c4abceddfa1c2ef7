"""
User lookup feature: schema, SQL, service and the /users endpoint.
"""
