"""Core data model shared by the detection engines and the CLI."""
