"""Rendering of planner expressions through SQLAlchemy Core."""
