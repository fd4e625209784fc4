"""HTTP host for the form builder."""
