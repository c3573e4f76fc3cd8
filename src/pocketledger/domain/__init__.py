"""Domain layer for pocketledger application.

Services are imported from their own modules. pocketledger.database and
pocketledger.utils import entities and errors from this package, so it
must not import the services.
"""
