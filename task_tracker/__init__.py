"""Task Tracker - project and task management backend."""
