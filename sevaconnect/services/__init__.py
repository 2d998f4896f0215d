"""
Service layer.

Every public operation returns a ``ServiceResult`` and runs its writes in a
single transaction.
"""
