"""
CubeCraft game layer.

Provides game-specific persistence built on top of the engine:
- Save (binary world save format, size/write/read, SaveManager)
- World (block types, chunk arrays, the active world session)
"""

__version__ = "0.1.0"
