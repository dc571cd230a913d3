"""Planning of physical stream operators."""
