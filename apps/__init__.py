# apps/__init__.py

"""
Trackboard - Django applications

This package contains every application of the system:
- core: models, authentication, workspaces and permissions
- board: boards, lanes, ordering engine and WebSockets
- tasks: tasks and their assignees, labels, comments, attachments, subtasks
"""

__version__ = '0.1.0'
