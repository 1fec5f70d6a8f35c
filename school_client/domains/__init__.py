"""Domain layer (client-side business rules and constants).

Domain modules do no IO and should not depend on UI. They operate on the plain
JSON dicts returned by the API.
"""
