"""HTTP service exposing the calendar core."""
