"""Gateway HTTP layer: router, middleware chain, and response envelope.

Import from the submodules directly; this package keeps no re-exports so the
error handlers can depend on ``responses`` without pulling in the router.
"""
