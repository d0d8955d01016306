"""ASGI request pipeline: dispatch, invocation, negotiation, sending."""
