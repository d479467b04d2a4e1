# apps/board/__init__.py

"""
Board - Kanban boards of a workspace

Features:
- Lanes with positions and WIP limits
- Atomic bulk lane reordering and task moves
- WebSockets for live board updates
"""
