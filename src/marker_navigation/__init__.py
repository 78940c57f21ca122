"""Resolve marker-driven navigation goals and convert them into a robot's working frame."""
