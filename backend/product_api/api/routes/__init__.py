"""Route Modules — one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes declare their RequestPipeline and delegate persistence to services/

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""
