"""Application services layer.

Each service binds one screen's endpoints to the domain helpers. Services take
an injected ApiClient and the signed-in user; they avoid UI concerns.
"""
