"""Feature packages for neo-quotas."""
