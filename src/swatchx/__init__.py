"""SwatchX: distinct color-name discovery over the hue wheel."""
