"""
Business services of the Abroadly server.

Services validate requests, apply the business rules and raise
``HTTPException`` with client-facing messages; routers stay thin.
"""
