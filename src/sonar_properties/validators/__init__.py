"""Record classification and pre-generation checks."""
