"""HTTP surface for SwatchX."""
