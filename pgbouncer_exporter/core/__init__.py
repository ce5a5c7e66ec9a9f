"""Core building blocks: config, logging, cells and coercion."""
