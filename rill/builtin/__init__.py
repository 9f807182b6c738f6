"""Native functions and macros installed in the root environment."""
