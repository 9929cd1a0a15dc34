"""Command-line front ends: interactive play and headless simulation."""
