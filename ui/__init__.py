"""User interfaces for Crazy Eights."""
