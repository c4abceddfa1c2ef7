"""
Object fetch feature: schema, service and the /storage endpoint.
"""
