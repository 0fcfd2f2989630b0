"""Sessions module - server-side bearer-token sessions."""
