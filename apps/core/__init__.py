# apps/core/__init__.py

"""
Core - base application of Trackboard

Contains:
- Models (User, Workspace, Board, Lane, Task and task details)
- JWT authentication service and middleware
- Workspace service and membership checks
- Error envelope and seed command
"""
