"""Infrastructure layer (IO clients).

Anything that talks to the network lives here so domain logic stays pure.
"""
