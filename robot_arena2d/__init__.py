"""
robot_arena2d - Viewer 2D untuk banyak robot beroda di arena persegi.

Package ini memisahkan 3 layer utama:
  1. Layout Engine   → transformasi incremental arena (logical) ke display
  2. Renderer (Pygame) → menggambar ikon robot ke surface
  3. Viewer Node     → event loop, pose feed, dan positions log
"""
