"""Users module - control-plane accounts."""
