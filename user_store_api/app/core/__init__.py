"""Configuration, logging, errors and field validators shared by the app."""
