"""Pure load-resolution and warm-up planning core."""
