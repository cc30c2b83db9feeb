"""REST service exposing Crazy Eights sessions."""
