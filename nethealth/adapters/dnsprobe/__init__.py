"""DNS probe adapters (dnspython)."""
