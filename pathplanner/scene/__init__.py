"""
Scene module.
Persisted scene format and random scene generation.
"""

from .scene_io import Scene, load_scene, save_scene, scene_from_dict, scene_to_dict
from .scene_generator import SceneGenerator

__all__ = ['Scene', 'load_scene', 'save_scene', 'scene_from_dict', 'scene_to_dict', 'SceneGenerator']
