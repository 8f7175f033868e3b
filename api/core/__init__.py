"""
Shared, cross-cutting code for the API.

`core/` should contain small building blocks that multiple features use
(DB wiring, settings, logging, request context). It must not import feature
packages such as `auth/`; features plug into it (e.g. the username resolver
handed to `RequestContextMiddleware`).
"""
