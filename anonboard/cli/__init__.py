"""AnonBoard Command Line Tools."""
