"""sceneforge — procedural scene-graph layout engine for marketing illustrations."""

__version__ = "0.1.0"
