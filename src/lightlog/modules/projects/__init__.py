"""Projects module - tenants and their schema registry."""
