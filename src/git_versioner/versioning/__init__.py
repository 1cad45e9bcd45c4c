"""Version derivation from commit topology."""
