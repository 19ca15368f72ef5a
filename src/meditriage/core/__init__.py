"""Configuration, logging and other cross-cutting concerns."""
