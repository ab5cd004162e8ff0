"""Git gateway and branch creation."""
